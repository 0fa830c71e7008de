"""Credentials – InMemoryCredentialStore."""
from __future__ import annotations

import logging
import threading

from eiffel_broadcaster.credentials.port import (
    CertificateCredential,
    CredentialScope,
    CredentialsChangedListener,
)

logger = logging.getLogger(__name__)


class InMemoryCredentialStore:
    """Holds system-wide credentials plus credentials bound to one execution context.

    ``save()`` notifies every registered listener; the signing key cache
    registers ``clear`` so that rotated or revoked keys stop being used.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._credentials: dict[str, CertificateCredential] = {}
        self._scoped: dict[str, dict[str, CertificateCredential]] = {}
        self._listeners: list[CredentialsChangedListener] = []

    def add(self, credential: CertificateCredential, context: str | None = None) -> None:
        with self._lock:
            if context is None:
                self._credentials[credential.id] = credential
            else:
                self._scoped.setdefault(context, {})[credential.id] = credential

    def remove(self, credential_id: str, context: str | None = None) -> None:
        with self._lock:
            if context is None:
                self._credentials.pop(credential_id, None)
            else:
                self._scoped.get(context, {}).pop(credential_id, None)

    def lookup(self, credential_id: str, context: str | None = None) -> CertificateCredential | None:
        with self._lock:
            if context is not None:
                scoped = self._scoped.get(context, {}).get(credential_id)
                if scoped is not None:
                    return scoped
            credential = self._credentials.get(credential_id)
        if credential is None:
            return None
        if context is not None and credential.scope is CredentialScope.SYSTEM:
            return None
        return credential

    def add_listener(self, listener: CredentialsChangedListener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def save(self) -> None:
        """Persist point of the store: announce that credentials changed."""
        with self._lock:
            listeners = list(self._listeners)
        logger.info("credentials.changed listeners=%d", len(listeners))
        for listener in listeners:
            listener()


__all__ = ["InMemoryCredentialStore"]
