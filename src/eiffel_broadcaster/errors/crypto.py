"""Cryptographic errors: fatal for the event being signed."""

from __future__ import annotations

from typing import Any

from eiffel_broadcaster.errors.base import BroadcasterError


class CryptoError(BroadcasterError):
    """Generic failure while producing or checking a signature."""

    default_code = "crypto_error"


class UnsupportedAlgorithmError(CryptoError):
    """The key type / hash combination has no signature algorithm."""

    default_code = "unsupported_algorithm"

    def __init__(
        self,
        message: str,
        *,
        key_type: str | None = None,
        hash_algorithm: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.key_type = key_type
        self.hash_algorithm = hash_algorithm


class InvalidKeyError(CryptoError):
    """The key material could not be decoded, e.g. because the password is wrong."""

    default_code = "invalid_key"


class SignatureFailedError(CryptoError):
    """The signature primitive itself failed."""

    default_code = "signature_failed"


class CanonicalizationError(CryptoError):
    """The event could not be serialised to canonical JSON."""

    default_code = "canonicalization_error"


__all__ = [
    "CanonicalizationError",
    "CryptoError",
    "InvalidKeyError",
    "SignatureFailedError",
    "UnsupportedAlgorithmError",
]
