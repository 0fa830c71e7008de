"""Observability – scrubbing of secrets from log events.

Two kinds of secret end up in broadcaster log events: values under
sensitive keys (the broker password, keystores, signature values) and
broker URIs with embedded credentials such as ``amqp://bot:pw@mq``.
``SensitiveFieldsFilter`` masks both, at any nesting depth.
"""
from __future__ import annotations

import re
from typing import Any

DEFAULT_SENSITIVE_FIELDS: frozenset[str] = frozenset({
    "password",
    "user_password",
    "signature",
    "private_key",
    "keystore",
})

_AMQP_USERINFO = re.compile(r"(amqps?://)[^/@\s]+@", re.IGNORECASE)


class SensitiveFieldsFilter:
    REDACTED = "[REDACTED]"

    def __init__(self, sensitive_fields: frozenset[str] | None = None) -> None:
        fields = DEFAULT_SENSITIVE_FIELDS if sensitive_fields is None else sensitive_fields
        self._fields = frozenset(name.lower() for name in fields)

    def is_sensitive(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._fields

    def scrub_uri(self, text: str) -> str:
        """``amqp://bot:pw@mq/vhost`` becomes ``amqp://[REDACTED]@mq/vhost``."""
        return _AMQP_USERINFO.sub(lambda m: f"{m.group(1)}{self.REDACTED}@", text)

    def redact(self, data: dict[str, Any]) -> dict[str, Any]:
        """Mask the top-level sensitive keys of *data* only."""
        return {k: self.REDACTED if self.is_sensitive(k) else v for k, v in data.items()}

    def redact_deep(self, data: dict[str, Any]) -> dict[str, Any]:
        return {k: self.REDACTED if self.is_sensitive(k) else self._scrub(v) for k, v in data.items()}

    def _scrub(self, value: Any) -> Any:
        if isinstance(value, dict):
            return self.redact_deep(value)
        if isinstance(value, list):
            return [self._scrub(item) for item in value]
        if isinstance(value, tuple):
            return tuple(self._scrub(item) for item in value)
        if isinstance(value, str):
            return self.scrub_uri(value)
        return value

    def __call__(self, logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        """structlog processor form."""
        return self.redact_deep(event_dict)


__all__ = ["DEFAULT_SENSITIVE_FIELDS", "SensitiveFieldsFilter"]
