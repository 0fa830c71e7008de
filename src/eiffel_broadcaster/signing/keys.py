"""Signing – extraction of the signing key and identity from a credential."""
from __future__ import annotations

import dataclasses
from datetime import datetime
from typing import Any

from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.serialization import pkcs12

from eiffel_broadcaster.clock import Clock, SystemClock
from eiffel_broadcaster.credentials import CertificateCredential
from eiffel_broadcaster.errors import (
    InvalidCredentialConfigurationError,
    InvalidKeyError,
    UnsupportedAlgorithmError,
)


@dataclasses.dataclass(frozen=True)
class SigningInfo:
    """The private key and subject identity of a credential, and when they were extracted."""

    identity: str
    key: Any = dataclasses.field(repr=False)
    extracted_at: datetime


def extract_signing_info(credential: CertificateCredential, clock: Clock | None = None) -> SigningInfo:
    """Decode the first private key and certificate of *credential*'s keystore.

    The identity is the certificate's subject in RFC 4514 form, e.g.
    ``CN=build-server,O=Example``.

    Raises:
        InvalidCredentialConfigurationError: if the keystore is empty, has no
            private key, or has no X.509 certificate for the key.
        InvalidKeyError: if the keystore can't be decoded, typically because
            the password is wrong.
        UnsupportedAlgorithmError: if the keystore uses an algorithm the
            cryptography backend doesn't support.
    """
    if not credential.keystore:
        raise InvalidCredentialConfigurationError("The keystore in the credential object was empty.")
    password = credential.password.encode("utf-8") if credential.password else None
    try:
        key, certificate, additional = pkcs12.load_key_and_certificates(credential.keystore, password)
    except UnsupportedAlgorithm as exc:
        raise UnsupportedAlgorithmError(
            f"The keystore of credential {credential.id} uses an unsupported algorithm",
            cause=exc,
        ) from exc
    except (ValueError, TypeError) as exc:
        raise InvalidKeyError(
            f"The keystore of credential {credential.id} could not be decoded",
            detail={"credential_id": credential.id},
            cause=exc,
        ) from exc

    if key is None and certificate is None and not additional:
        raise InvalidCredentialConfigurationError("The keystore in the credential object was empty.")
    if key is None:
        raise InvalidCredentialConfigurationError("No private key was found in the credential object's keystore.")
    if not isinstance(certificate, x509.Certificate):
        raise InvalidCredentialConfigurationError(
            "No X.509 certificate was found in the credential object's keystore."
        )
    return SigningInfo(
        identity=certificate.subject.rfc4514_string(),
        key=key,
        extracted_at=(clock or SystemClock()).now(),
    )


__all__ = ["SigningInfo", "extract_signing_info"]
