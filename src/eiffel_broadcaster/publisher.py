"""Publish orchestrator – sign, validate, route and queue events.

``must_publish`` raises typed errors for signing and validation problems so
that a caller can fail its own operation; ``publish`` is the best-effort
variant used for lifecycle notifications that must never abort the work
that triggered them.  Neither waits for the broker: a returned document
means "validated and queued", not "delivered".
"""
from __future__ import annotations

import json
import logging
from typing import Any

from eiffel_broadcaster.clock import Clock, SystemClock
from eiffel_broadcaster.config.settings import BroadcasterSettings
from eiffel_broadcaster.delivery import DeliveryEngine, OutboundMessage
from eiffel_broadcaster.errors import BroadcasterError, CanonicalizationError
from eiffel_broadcaster.events import Event
from eiffel_broadcaster.routing import RoutingKeyProvider, routing_key_provider_from_settings
from eiffel_broadcaster.signing import EventSigner
from eiffel_broadcaster.validation import EventValidator

logger = logging.getLogger(__name__)


class EventPublisher:
    """Ties the signer, the validator and the delivery engine together."""

    def __init__(
        self,
        settings: BroadcasterSettings,
        engine: DeliveryEngine,
        validator: EventValidator | None = None,
        system_signer: EventSigner | None = None,
        routing_key_provider: RoutingKeyProvider | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.settings = settings
        self._engine = engine
        self._validator = validator or EventValidator()
        self._system_signer = system_signer
        self._routing = routing_key_provider or routing_key_provider_from_settings(settings)
        self._clock = clock or SystemClock()

    def must_publish(
        self,
        event: Event,
        allow_system_signing: bool = True,
        *,
        signer: EventSigner | None = None,
    ) -> dict[str, Any] | None:
        """Sign (optionally), validate and queue *event*.

        Args:
            event: The event to send.  It is modified in place when signed.
            allow_system_signing: Sign with the system credential if system
                signing is enabled.  Ignored when *signer* is given.
            signer: Sign with this signer instead, e.g. a
                :class:`~eiffel_broadcaster.signing.UserEventSigner`.

        Returns:
            The JSON document that was queued, or ``None`` when publishing is
            disabled.

        Raises:
            ConfigurationError, CryptoError: signing failed.
            ValidationError: the event has no schema or violates it.
        """
        if not self.settings.enabled:
            logger.debug("publisher.disabled event_id=%s type=%s", event.id, event.type)
            return None

        if signer is not None:
            signer.sign(event)
        elif allow_system_signing and self._system_signer is not None:
            self._system_signer.sign(event)

        document = event.to_dict()
        body = self._serialize(document)
        self._validator.validate(event.type, event.version, document)

        message = OutboundMessage(
            exchange=self.settings.exchange_name,
            routing_key=self._routing.routing_key(event),
            body=body,
            timestamp=self._clock.now(),
            delivery_mode=self.settings.delivery_mode,
            app_id=self.settings.app_id or None,
        )
        queued = self._engine.enqueue(message)
        logger.info(
            "publisher.published event_id=%s type=%s routing_key=%s queued=%s",
            event.id,
            event.type,
            message.routing_key,
            queued,
        )
        return document

    def publish(self, event: Event, allow_system_signing: bool = True) -> dict[str, Any] | None:
        """Best-effort :meth:`must_publish`: errors are logged and ``None`` is returned."""
        try:
            return self.must_publish(event, allow_system_signing)
        except BroadcasterError as exc:
            logger.error(
                "publisher.publish_failed event_id=%s type=%s code=%s error=%s",
                event.id,
                event.type,
                exc.code,
                exc.message,
                exc_info=exc,
            )
            return None

    @staticmethod
    def _serialize(document: dict[str, Any]) -> bytes:
        try:
            return json.dumps(document, ensure_ascii=False, allow_nan=False).encode("utf-8")
        except (TypeError, ValueError) as exc:
            raise CanonicalizationError(f"Unable to serialize event: {exc}", cause=exc) from exc


__all__ = ["EventPublisher"]
