"""Credentials – certificate credential and store port."""
from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Callable, Protocol


class CredentialScope(str, Enum):
    """Visibility of a credential.

    ``SYSTEM`` credentials are only visible to system-wide lookups (no
    execution context); ``GLOBAL`` credentials are also visible to builds.
    """

    SYSTEM = "SYSTEM"
    GLOBAL = "GLOBAL"


@dataclasses.dataclass(frozen=True)
class CertificateCredential:
    """A PKCS#12 key container holding a private key and its certificate."""

    id: str
    keystore: bytes = dataclasses.field(repr=False)
    password: str | None = dataclasses.field(default=None, repr=False)
    scope: CredentialScope = CredentialScope.GLOBAL
    description: str = ""


CredentialsChangedListener = Callable[[], None]


class CredentialStore(Protocol):
    """Port: resolve a credential by id, optionally within an execution context."""

    def lookup(self, credential_id: str, context: str | None = None) -> CertificateCredential | None: ...


__all__ = [
    "CertificateCredential",
    "CredentialScope",
    "CredentialStore",
    "CredentialsChangedListener",
]
