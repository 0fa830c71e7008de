"""Signing – in-place signing of events and the system/user signer variants."""
from __future__ import annotations

import base64
import logging
from typing import Any, Protocol

from eiffel_broadcaster.config.settings import BroadcasterSettings
from eiffel_broadcaster.credentials import CredentialStore
from eiffel_broadcaster.errors import CredentialNotFoundError
from eiffel_broadcaster.events import (
    Event,
    HashAlgorithm,
    IntegrityProtection,
    Security,
    SignatureAlgorithm,
    canonicalize,
)
from eiffel_broadcaster.signing.cache import SigningKeyCache
from eiffel_broadcaster.signing.keys import extract_signing_info

logger = logging.getLogger(__name__)


class EventSigner(Protocol):
    """Signs an event in place.

    Implementations choose the key and may decline to sign, in which case
    the event is left untouched and ``False`` is returned.
    """

    def sign(self, event: Event) -> bool: ...


def sign_event(event: Event, key: Any, identity: str, hash_algorithm: HashAlgorithm) -> None:
    """Sign *event* in place with *key*, recording *identity* as the author.

    The signature covers the canonical form of the event with an empty
    ``signature`` field.  On failure the event's previous security block is
    restored.

    Raises:
        UnsupportedAlgorithmError: if the key type has no signature algorithm.
        CanonicalizationError: if the event can't be serialised.
        SignatureFailedError: if the signature primitive fails.
    """
    algorithm = SignatureAlgorithm.for_key(key, hash_algorithm)
    previous = event.meta.security
    protection = IntegrityProtection(alg=algorithm.value)
    event.meta.security = Security(
        author_identity=identity,
        integrity_protection=protection,
        sequence_protection=list(previous.sequence_protection) if previous else [],
    )
    try:
        signature = algorithm.sign(key, canonicalize(event))
    except Exception:
        event.meta.security = previous
        raise
    protection.signature = base64.b64encode(signature).decode("ascii")


class SystemEventSigner:
    """Signs with the administrator-managed system credential.

    Events signed this way aren't under the control of build authors.  Keys
    come from the shared :class:`SigningKeyCache`.
    """

    def __init__(self, settings: BroadcasterSettings, cache: SigningKeyCache) -> None:
        self._settings = settings
        self._cache = cache

    def sign(self, event: Event) -> bool:
        if not self._settings.system_signing_enabled:
            return False
        credential_id = self._settings.system_signing_credentials_id or ""
        info = self._cache.get(credential_id)
        sign_event(event, info.key, info.identity, self._settings.hash_algorithm)
        logger.debug("signing.signed event_id=%s identity=%s", event.id, info.identity)
        return True


class UserEventSigner:
    """Signs with a credential visible to one execution context, e.g. a build run.

    The credential is decoded on every call; it is not cached.
    """

    def __init__(
        self,
        credentials_id: str,
        hash_algorithm: HashAlgorithm,
        context: str,
        store: CredentialStore,
    ) -> None:
        self.credentials_id = credentials_id
        self.hash_algorithm = hash_algorithm
        self.context = context
        self._store = store

    def sign(self, event: Event) -> bool:
        credential = self._store.lookup(self.credentials_id, self.context)
        if credential is None:
            raise CredentialNotFoundError(self.credentials_id, detail={"context": self.context})
        info = extract_signing_info(credential)
        sign_event(event, info.key, info.identity, self.hash_algorithm)
        logger.debug("signing.signed event_id=%s identity=%s context=%s", event.id, info.identity, self.context)
        return True


__all__ = ["EventSigner", "SystemEventSigner", "UserEventSigner", "sign_event"]
