"""Validation – EventValidator."""
from __future__ import annotations

import json
import logging
import threading
from typing import Any

from jsonschema import Draft4Validator
from jsonschema import ValidationError as JsonSchemaValidationError

from eiffel_broadcaster.errors import EventValidationFailedError, SchemaUnavailableError
from eiffel_broadcaster.events import Event
from eiffel_broadcaster.validation.provider import BundledSchemaProvider, SchemaProvider

logger = logging.getLogger(__name__)


def _describe(error: JsonSchemaValidationError) -> dict[str, Any]:
    path = "$" + "".join(f"[{p}]" if isinstance(p, int) else f".{p}" for p in error.absolute_path)
    return {
        "path": path,
        "message": f"{path}: {error.message}",
        "validator": error.validator,
        "schema_path": "/".join(str(p) for p in error.absolute_schema_path),
    }


class EventValidator:
    """Validates event documents against the schema of their type and version.

    Compiled validators are cached per ``(type, version)`` for the lifetime of
    the instance; schemas are assumed immutable.
    """

    def __init__(self, provider: SchemaProvider | None = None) -> None:
        self._provider = provider or BundledSchemaProvider()
        self._cache: dict[tuple[str, str], Draft4Validator] = {}
        self._lock = threading.Lock()

    def validate(self, event_type: str, event_version: str, document: Any) -> None:
        """Validate *document*, the JSON form of an event.

        Raises:
            SchemaUnavailableError: no schema exists for the type and version.
            EventValidationFailedError: with every violated constraint.
        """
        validator = self._validator_for(event_type, event_version)
        errors = sorted(validator.iter_errors(document), key=lambda e: [str(p) for p in e.absolute_path])
        if errors:
            raise EventValidationFailedError([_describe(e) for e in errors], document)

    def validate_event(self, event: Event) -> dict[str, Any]:
        """Validate *event* and return the document that was validated."""
        document = event.to_dict()
        self.validate(event.type, event.version, document)
        return document

    def _validator_for(self, event_type: str, event_version: str) -> Draft4Validator:
        key = (event_type, event_version)
        with self._lock:
            cached = self._cache.get(key)
        if cached is not None:
            return cached
        try:
            schema = self._provider.get_schema(event_type, event_version)
        except (OSError, json.JSONDecodeError) as exc:
            raise SchemaUnavailableError(
                event_type,
                event_version,
                f"Error reading schema for {event_type}@{event_version}",
                cause=exc,
            ) from exc
        if schema is None:
            raise SchemaUnavailableError(event_type, event_version)
        validator = Draft4Validator(schema)
        with self._lock:
            validator = self._cache.setdefault(key, validator)
        logger.debug("validation.schema_loaded type=%s version=%s", event_type, event_version)
        return validator


__all__ = ["EventValidator"]
