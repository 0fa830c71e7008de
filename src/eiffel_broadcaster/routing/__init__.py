"""Routing – how published events are addressed on the exchange."""
from eiffel_broadcaster.routing.providers import (
    FixedRoutingKeyProvider,
    RoutingKeyProvider,
    SepiaRoutingKeyProvider,
    routing_key_provider_from_settings,
)

__all__ = [
    "FixedRoutingKeyProvider",
    "RoutingKeyProvider",
    "SepiaRoutingKeyProvider",
    "routing_key_provider_from_settings",
]
