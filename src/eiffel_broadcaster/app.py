"""Broadcaster – the process-wide wiring of the publishing pipeline.

Build one :class:`Broadcaster` per process and pass it (or its parts) to the
code that emits events; tests build their own instances.
"""
from __future__ import annotations

import dataclasses
import logging
from typing import Any

from eiffel_broadcaster.clock import Clock, SystemClock
from eiffel_broadcaster.config.settings import BroadcasterSettings
from eiffel_broadcaster.credentials import CredentialStore, InMemoryCredentialStore
from eiffel_broadcaster.delivery import ConnectionCheckResult, DeliveryEngine, check_connection
from eiffel_broadcaster.events import Event, EventFactory, HostSourceProvider
from eiffel_broadcaster.publisher import EventPublisher
from eiffel_broadcaster.routing import routing_key_provider_from_settings
from eiffel_broadcaster.signing import EventSigner, SigningKeyCache, SystemEventSigner, UserEventSigner
from eiffel_broadcaster.validation import EventValidator

logger = logging.getLogger(__name__)


@dataclasses.dataclass
class Broadcaster:
    settings: BroadcasterSettings
    credentials: CredentialStore
    engine: DeliveryEngine
    key_cache: SigningKeyCache
    validator: EventValidator
    factory: EventFactory
    publisher: EventPublisher
    clock: Clock

    @classmethod
    def from_settings(
        cls,
        settings: BroadcasterSettings,
        credentials: CredentialStore | None = None,
        *,
        engine: DeliveryEngine | None = None,
        clock: Clock | None = None,
    ) -> "Broadcaster":
        """Wire every component for *settings*.

        When the credential store supports ``add_listener`` the key cache is
        registered to be cleared whenever the store is saved.
        """
        clock = clock or SystemClock()
        credentials = credentials if credentials is not None else InMemoryCredentialStore()
        engine = engine or DeliveryEngine()
        key_cache = SigningKeyCache(credentials, clock)
        add_listener = getattr(credentials, "add_listener", None)
        if add_listener is not None:
            add_listener(key_cache.clear)
        validator = EventValidator()
        publisher = EventPublisher(
            settings,
            engine,
            validator=validator,
            system_signer=SystemEventSigner(settings, key_cache),
            routing_key_provider=routing_key_provider_from_settings(settings),
            clock=clock,
        )
        factory = EventFactory(source_provider=HostSourceProvider(clock=clock), clock=clock)
        return cls(settings, credentials, engine, key_cache, validator, factory, publisher, clock)

    def start(self) -> None:
        """Hand the connection settings to the delivery engine, if enabled."""
        if not self.settings.enabled:
            logger.info("broadcaster.disabled")
            return
        self.engine.initialize(self.settings.to_connection_settings())

    def reconfigure(self, settings: BroadcasterSettings) -> None:
        """Switch to new settings without losing queued messages."""
        self.settings = settings
        self.publisher = EventPublisher(
            settings,
            self.engine,
            validator=self.validator,
            system_signer=SystemEventSigner(settings, self.key_cache),
            routing_key_provider=routing_key_provider_from_settings(settings),
            clock=self.clock,
        )
        self.start()

    def shutdown(self, timeout: float | None = 5.0) -> None:
        self.engine.shutdown(timeout)

    def test_connection(self) -> ConnectionCheckResult:
        return check_connection(self.settings.to_connection_settings())

    def user_signer(self, credentials_id: str, context: str, hash_algorithm: Any = None) -> UserEventSigner:
        """A signer for a credential visible to one execution *context*."""
        return UserEventSigner(
            credentials_id,
            hash_algorithm or self.settings.hash_algorithm,
            context,
            self.credentials,
        )

    def create_event(self, type_name: str, data: dict[str, Any] | None = None) -> Event:
        return self.factory.create(type_name, data)

    def must_publish(
        self,
        event: Event,
        allow_system_signing: bool = True,
        *,
        signer: EventSigner | None = None,
    ) -> dict[str, Any] | None:
        return self.publisher.must_publish(event, allow_system_signing, signer=signer)

    def publish(self, event: Event, allow_system_signing: bool = True) -> dict[str, Any] | None:
        return self.publisher.publish(event, allow_system_signing)


__all__ = ["Broadcaster"]
