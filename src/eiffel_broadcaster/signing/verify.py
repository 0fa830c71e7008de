"""Signing – verification of signed events."""
from __future__ import annotations

import base64
import binascii
from typing import Any

from eiffel_broadcaster.errors import UnsupportedAlgorithmError
from eiffel_broadcaster.events import Event, SignatureAlgorithm, canonicalize_document


def verify_event(event: Event, public_key: Any) -> bool:
    """Return ``True`` if *event* carries a valid signature made by *public_key*'s private key.

    The canonical payload is recomputed from the event with the signature
    field emptied.  Unsigned events, malformed signatures, HS* algorithms and
    algorithms that don't fit the key type return ``False``.
    """
    security = event.meta.security
    if security is None or security.integrity_protection is None:
        return False
    protection = security.integrity_protection
    try:
        signature = base64.b64decode(protection.signature, validate=True)
        algorithm = SignatureAlgorithm(protection.alg)
    except (binascii.Error, ValueError):
        return False
    document = event.to_dict()
    document["meta"]["security"]["integrityProtection"]["signature"] = ""
    try:
        return algorithm.verify(public_key, canonicalize_document(document), signature)
    except UnsupportedAlgorithmError:
        return False


__all__ = ["verify_event"]
