"""Events – JSON Canonicalization Scheme (RFC 8785) for event payloads.

Signatures are computed over the JCS form of an event so that any JCS
implementation, such as the Java ``JsonCanonicalizer`` used by other Eiffel
tooling, reproduces the signed bytes:

* object members are ordered by the UTF-16 code units of their names,
* numbers are IEEE 754 doubles written the way ECMAScript's
  ``Number.prototype.toString`` writes them (``1e-7``, ``10000000000000000``,
  ``1e+21``),
* strings are emitted as UTF-8 with only the mandatory JSON escapes,
* no whitespace is emitted.
"""
from __future__ import annotations

import json
import math
from typing import Any

from eiffel_broadcaster.errors import CanonicalizationError
from eiffel_broadcaster.events.model import Event

_MAX_SAFE_INTEGER = 2**53 - 1


def _utf16_order(key: str) -> bytes:
    return key.encode("utf-16-be", "surrogatepass")


def format_number(value: float) -> str:
    """Write a finite double the way ECMAScript does."""
    if not math.isfinite(value):
        raise ValueError(f"{value!r} has no JSON representation")
    if value == 0:
        return "0"
    sign = "-" if value < 0 else ""
    # repr() yields the shortest digit string that round-trips, as ECMAScript requires.
    mantissa, _, exponent = repr(abs(value)).partition("e")
    whole, _, fraction = mantissa.partition(".")
    digits = (whole + fraction).lstrip("0")
    # value == 0.<digits> * 10**point
    point = len(whole) + int(exponent or 0) - (len(whole + fraction) - len(digits))
    digits = digits.rstrip("0")
    k = len(digits)
    if k <= point <= 21:
        text = digits + "0" * (point - k)
    elif 0 < point <= 21:
        text = f"{digits[:point]}.{digits[point:]}"
    elif -6 < point <= 0:
        text = "0." + "0" * -point + digits
    else:
        exp = point - 1
        text = digits[0] + (f".{digits[1:]}" if k > 1 else "") + f"e{'+' if exp >= 0 else '-'}{abs(exp)}"
    return sign + text


def _serialize(value: Any) -> str:
    if value is None:
        return "null"
    if value is True:
        return "true"
    if value is False:
        return "false"
    if isinstance(value, int):
        if abs(value) <= _MAX_SAFE_INTEGER:
            return str(value)
        return format_number(float(value))
    if isinstance(value, float):
        return format_number(value)
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, dict):
        for key in value:
            if not isinstance(key, str):
                raise TypeError(f"Object keys must be strings, got {type(key).__name__}")
        members = (f"{_serialize(k)}:{_serialize(value[k])}" for k in sorted(value, key=_utf16_order))
        return "{" + ",".join(members) + "}"
    if isinstance(value, (list, tuple)):
        return "[" + ",".join(_serialize(v) for v in value) + "]"
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def canonicalize_document(document: Any) -> bytes:
    """Serialise an arbitrary JSON document to its JCS bytes.

    Raises:
        CanonicalizationError: if the document holds a value JSON can't encode.
    """
    try:
        return _serialize(document).encode("utf-8")
    except (TypeError, ValueError, OverflowError) as exc:
        raise CanonicalizationError(f"Unable to canonicalize event: {exc}", cause=exc) from exc


def canonicalize(event: Event) -> bytes:
    """Canonical bytes of *event*.

    The caller must have cleared ``meta.security.integrityProtection.signature``
    first; a payload that includes its own signature can't be signed.
    """
    security = event.meta.security
    if security is not None and security.integrity_protection is not None:
        if security.integrity_protection.signature:
            raise CanonicalizationError(
                "The signature field must be empty when canonicalizing an event",
                detail={"event_id": event.id},
            )
    return canonicalize_document(event.to_dict())


__all__ = ["canonicalize", "canonicalize_document", "format_number"]
