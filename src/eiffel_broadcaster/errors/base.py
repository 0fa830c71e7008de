"""Errors – BroadcasterError, the root of everything the broadcaster raises.

Every error carries a stable ``code`` slug that log queries can rely on,
structured ``detail`` (event id, credential id, setting name ...) and a
``retryable`` flag telling the caller whether repeating the same call can
succeed.
"""

from __future__ import annotations

import json
from typing import Any


class BroadcasterError(Exception):
    """Root of the error hierarchy.

    Args:
        message: Human-readable description.
        code: Machine-readable slug (defaults to ``default_code``).
        detail: Structured context, merged into ``to_dict()``.
        cause: The lower-level exception, also set as ``__cause__``.
    """

    default_code: str = "broadcaster_error"
    retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = dict(detail) if detail else {}
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict[str, Any]:
        """Structured form for JSON log lines and admin UIs."""
        payload: dict[str, Any] = {
            "error": type(self).__name__,
            "code": self.code,
            "message": self.message,
            "retryable": self.retryable,
        }
        if self.detail:
            payload["detail"] = self.detail
        if self.cause is not None:
            payload["cause"] = f"{type(self.cause).__name__}: {self.cause}"
        return payload

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)


class InvariantViolationError(BroadcasterError):
    """An event model invariant was violated, e.g. a write-once field was reassigned."""

    default_code = "invariant_violation"


__all__ = ["BroadcasterError", "InvariantViolationError"]
