"""Validation – bundled JSON schemas and the event validator."""
from eiffel_broadcaster.validation.provider import BundledSchemaProvider, SchemaProvider
from eiffel_broadcaster.validation.validator import EventValidator

__all__ = ["BundledSchemaProvider", "EventValidator", "SchemaProvider"]
