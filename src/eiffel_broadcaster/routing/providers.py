"""Routing – routing key providers."""
from __future__ import annotations

from typing import Protocol

from eiffel_broadcaster.config.settings import BroadcasterSettings
from eiffel_broadcaster.config.validation import InvalidSettingValueError
from eiffel_broadcaster.events import Event

PLACEHOLDER = "_"


class RoutingKeyProvider(Protocol):
    """Port: compute the routing key of an event.

    The result is one or more dot-separated tokens.
    """

    def routing_key(self, event: Event) -> str: ...


class FixedRoutingKeyProvider:
    """Uses the same routing key for every event."""

    def __init__(self, key: str) -> None:
        if not key or not key.strip():
            raise InvalidSettingValueError("fixed_routing_key", key, "the routing key must be a non-empty string")
        self.key = key

    def routing_key(self, event: Event) -> str:  # noqa: ARG002
        return self.key

    def __repr__(self) -> str:
        return f"FixedRoutingKeyProvider(key={self.key!r})"


class SepiaRoutingKeyProvider:
    """Routing keys following the Sepia convention.

    ``eiffel._.<event type>.<tag>.<domain id>``, with ``_`` standing in for a
    blank tag or an event without ``meta.source.domainId``.
    """

    def __init__(self, tag: str = "") -> None:
        self.tag = tag or ""

    def routing_key(self, event: Event) -> str:
        source = event.meta.source
        domain_id = source.domain_id if source is not None and source.domain_id else PLACEHOLDER
        tag = self.tag.strip() or PLACEHOLDER
        return ".".join(("eiffel", PLACEHOLDER, event.type, tag, domain_id))

    def __repr__(self) -> str:
        return f"SepiaRoutingKeyProvider(tag={self.tag!r})"


def routing_key_provider_from_settings(settings: BroadcasterSettings) -> RoutingKeyProvider:
    """Build the provider selected by ``settings.routing_key_provider``."""
    if settings.routing_key_provider == "fixed":
        return FixedRoutingKeyProvider(settings.fixed_routing_key or "")
    return SepiaRoutingKeyProvider(settings.sepia_tag or "")


__all__ = [
    "FixedRoutingKeyProvider",
    "RoutingKeyProvider",
    "SepiaRoutingKeyProvider",
    "routing_key_provider_from_settings",
]
