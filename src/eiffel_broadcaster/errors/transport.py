"""Transport errors: logged by the delivery worker, never raised to publishers."""

from __future__ import annotations

from typing import Any

from eiffel_broadcaster.errors.base import BroadcasterError


class TransportError(BroadcasterError):
    """Broker I/O failure; the delivery engine heals itself on the next cycle."""

    default_code = "transport_error"
    retryable = True


class BrokerConnectionError(TransportError):
    """Could not open a connection or channel to the broker."""

    default_code = "broker_connection_error"

    def __init__(self, uri: str, message: str | None = None, **kwargs: Any) -> None:
        super().__init__(message or f"Could not connect to '{uri}'", **kwargs)
        self.uri = uri


__all__ = ["BrokerConnectionError", "TransportError"]
