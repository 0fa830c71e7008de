"""Delivery – OutboundMessage."""
from __future__ import annotations

import dataclasses
from datetime import datetime

CONTENT_TYPE_JSON = "application/json"
PERSISTENT = 2
TRANSIENT = 1


@dataclasses.dataclass(frozen=True)
class OutboundMessage:
    """A serialised event waiting for the delivery worker.

    It leaves the queue when the worker hands it to the AMQP client, whatever
    the outcome of that call.
    """

    exchange: str
    routing_key: str
    body: bytes
    timestamp: datetime
    content_type: str = CONTENT_TYPE_JSON
    delivery_mode: int = PERSISTENT
    app_id: str | None = None

    def __post_init__(self) -> None:
        if self.delivery_mode not in (TRANSIENT, PERSISTENT):
            raise ValueError(f"delivery_mode must be {TRANSIENT} or {PERSISTENT}, got {self.delivery_mode}")

    @property
    def persistent(self) -> bool:
        return self.delivery_mode == PERSISTENT


__all__ = ["CONTENT_TYPE_JSON", "PERSISTENT", "TRANSIENT", "OutboundMessage"]
