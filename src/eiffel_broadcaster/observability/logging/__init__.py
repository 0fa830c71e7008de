"""Observability – structured logging helpers."""
from eiffel_broadcaster.observability.logging.factory import configure_logging, get_logger
from eiffel_broadcaster.observability.logging.filters import DEFAULT_SENSITIVE_FIELDS, SensitiveFieldsFilter

__all__ = ["DEFAULT_SENSITIVE_FIELDS", "SensitiveFieldsFilter", "configure_logging", "get_logger"]
