"""Credentials – key-bearing credentials and the stores that resolve them."""
from eiffel_broadcaster.credentials.memory import InMemoryCredentialStore
from eiffel_broadcaster.credentials.port import (
    CertificateCredential,
    CredentialScope,
    CredentialStore,
    CredentialsChangedListener,
)

__all__ = [
    "CertificateCredential",
    "CredentialScope",
    "CredentialStore",
    "CredentialsChangedListener",
    "InMemoryCredentialStore",
]
