"""Events – EventFactory and pluggable event version resolution."""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

from eiffel_broadcaster.clock import Clock, SystemClock
from eiffel_broadcaster.errors import InvariantViolationError
from eiffel_broadcaster.events.model import Event, Meta, Source
from eiffel_broadcaster.events.source import SourceProvider

# Paris edition of the Eiffel protocol.
PARIS_EDITION_VERSIONS: Mapping[str, str] = {
    "EiffelActivityCanceledEvent": "3.0.0",
    "EiffelActivityFinishedEvent": "3.0.0",
    "EiffelActivityStartedEvent": "4.0.0",
    "EiffelActivityTriggeredEvent": "4.0.0",
    "EiffelArtifactCreatedEvent": "3.0.0",
    "EiffelArtifactPublishedEvent": "3.1.0",
    "EiffelCompositionDefinedEvent": "3.0.0",
}


class EventVersionResolver(Protocol):
    """Port: map an event type name to the version new events should use."""

    def resolve(self, type_name: str) -> str: ...


class StaticVersionResolver:
    """Resolves versions from a fixed table."""

    def __init__(self, versions: Mapping[str, str] | None = None) -> None:
        self._versions = dict(PARIS_EDITION_VERSIONS if versions is None else versions)

    def resolve(self, type_name: str) -> str:
        try:
            return self._versions[type_name]
        except KeyError:
            raise InvariantViolationError(
                f"No version is known for event type {type_name}",
                detail={"known_types": sorted(self._versions)},
            ) from None

    @property
    def types(self) -> list[str]:
        return sorted(self._versions)


class EventFactory:
    """Creates events with id, time, type, version and ``meta.source`` filled in.

    The caller populates the remaining fields required by the event's schema.
    """

    def __init__(
        self,
        resolver: EventVersionResolver | None = None,
        source_provider: SourceProvider | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._resolver = resolver or StaticVersionResolver()
        self._source_provider = source_provider
        self._clock = clock or SystemClock()

    def create(
        self,
        type_name: str,
        data: dict[str, Any] | None = None,
        *,
        tags: list[str] | None = None,
    ) -> Event:
        meta = Meta(
            type=type_name,
            version=self._resolver.resolve(type_name),
            time=self._clock.epoch_millis(),
            tags=list(tags or []),
        )
        event = Event(meta=meta, data=dict(data or {}))
        self.populate_source(event)
        return event

    def populate_source(self, event: Event) -> None:
        if self._source_provider is None:
            return
        if event.meta.source is None:
            event.meta.source = Source()
        self._source_provider.populate_source(event.meta.source)


__all__ = [
    "EventFactory",
    "EventVersionResolver",
    "PARIS_EDITION_VERSIONS",
    "StaticVersionResolver",
]
