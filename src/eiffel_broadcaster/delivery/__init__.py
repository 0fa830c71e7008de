"""Delivery – outbound messages, connection settings and the delivery engine."""
from eiffel_broadcaster.delivery.connection import ConnectionCheckResult, check_connection
from eiffel_broadcaster.delivery.engine import (
    CONNECTION_WAIT,
    HEARTBEAT_INTERVAL,
    MESSAGE_QUEUE_SIZE,
    POLL_TIMEOUT,
    ConnectionState,
    DeliveryEngine,
)
from eiffel_broadcaster.delivery.message import OutboundMessage
from eiffel_broadcaster.delivery.settings import ConnectionSettings, has_amqp_scheme

__all__ = [
    "CONNECTION_WAIT",
    "HEARTBEAT_INTERVAL",
    "MESSAGE_QUEUE_SIZE",
    "POLL_TIMEOUT",
    "ConnectionCheckResult",
    "ConnectionSettings",
    "ConnectionState",
    "DeliveryEngine",
    "OutboundMessage",
    "check_connection",
    "has_amqp_scheme",
]
