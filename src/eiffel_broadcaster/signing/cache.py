"""Signing – SigningKeyCache, a pull-through cache of decoded signing keys."""
from __future__ import annotations

import logging
import threading
from datetime import timedelta

from eiffel_broadcaster.clock import Clock, SystemClock
from eiffel_broadcaster.credentials import CredentialStore
from eiffel_broadcaster.errors import CredentialNotFoundError
from eiffel_broadcaster.signing.keys import SigningInfo, extract_signing_info

logger = logging.getLogger(__name__)


class SigningKeyCache:
    """Time-based in-memory cache mapping credential ids to :class:`SigningInfo`.

    An entry is reused for at most ``TTL`` before it is extracted again from
    the credential.  Entries are never evicted otherwise, so the cache grows
    with the number of distinct credentials used; ``clear()`` drops them all
    and is meant to be called whenever the credential store is saved.

    One instance is shared per process and handed to the signers that need it.
    """

    TTL = timedelta(minutes=1)

    def __init__(self, store: CredentialStore, clock: Clock | None = None) -> None:
        self._store = store
        self._clock = clock or SystemClock()
        self._entries: dict[str, SigningInfo] = {}
        self._lock = threading.Lock()

    def get(self, credential_id: str) -> SigningInfo:
        """Return the signing key and identity for *credential_id*.

        Raises:
            CredentialNotFoundError: if the store has no such system credential.
            InvalidCredentialConfigurationError, InvalidKeyError,
            UnsupportedAlgorithmError: see :func:`extract_signing_info`.
        """
        with self._lock:
            entry = self._entries.get(credential_id)
            if entry is not None and not self._has_expired(entry):
                return entry

            credential = self._store.lookup(credential_id)
            if credential is None:
                raise CredentialNotFoundError(credential_id)
            entry = extract_signing_info(credential, self._clock)
            self._entries[credential_id] = entry
            logger.debug("signing.key_extracted credential_id=%s identity=%s", credential_id, entry.identity)
            return entry

    def clear(self) -> None:
        """Clear the cache of all entries."""
        with self._lock:
            self._entries.clear()
        logger.info("signing.key_cache_cleared")

    def size(self) -> int:
        """Current number of (possibly expired) entries."""
        with self._lock:
            return len(self._entries)

    def _has_expired(self, entry: SigningInfo) -> bool:
        return entry.extracted_at < self._clock.now() - self.TTL


__all__ = ["SigningKeyCache"]
