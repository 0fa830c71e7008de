"""Validation errors: the event is never sent."""

from __future__ import annotations

from typing import Any

from eiffel_broadcaster.errors.base import BroadcasterError


class ValidationError(BroadcasterError):
    """The event cannot be validated or failed validation."""

    default_code = "validation_error"


class SchemaUnavailableError(ValidationError):
    """No schema is bundled for the requested event type and version."""

    default_code = "schema_unavailable"

    def __init__(self, event_type: str, event_version: str, message: str | None = None, **kwargs: Any) -> None:
        super().__init__(
            message or f"Unable to locate a schema for {event_type}@{event_version}",
            **kwargs,
        )
        self.event_type = event_type
        self.event_version = event_version


class EventValidationFailedError(ValidationError):
    """The event document violates its schema.

    ``errors`` lists every violated constraint, not only the first one.
    ``document`` is the offending JSON document.
    """

    default_code = "event_validation_failed"

    def __init__(
        self,
        errors: list[dict[str, Any]],
        document: Any,
        **kwargs: Any,
    ) -> None:
        summary = "; ".join(e.get("message", "") for e in errors)
        super().__init__(f"Schema validation failed ({summary}) for event: {document}", **kwargs)
        self.errors = errors
        self.document = document

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base["errors"] = self.errors
        return base


__all__ = ["EventValidationFailedError", "SchemaUnavailableError", "ValidationError"]
