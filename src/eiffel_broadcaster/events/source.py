"""Events – providers of the ``meta.source`` block."""
from __future__ import annotations

import logging
import socket
import threading
from datetime import timedelta
from typing import Protocol

from eiffel_broadcaster.clock import Clock, SystemClock
from eiffel_broadcaster.events.model import Source

logger = logging.getLogger(__name__)


class SourceProvider(Protocol):
    """Port: fill in the description of the producing system."""

    def populate_source(self, source: Source) -> None: ...


class HostSourceProvider:
    """Describes this process: its host name plus a configured name, URI and serializer.

    A failed host name lookup is retried at most every ``HOST_CHECK_INTERVAL``.
    """

    HOST_CHECK_INTERVAL = timedelta(minutes=2)

    def __init__(
        self,
        name: str | None = "eiffel-broadcaster",
        uri: str | None = None,
        serializer: str | None = None,
        domain_id: str | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._name = name
        self._uri = uri
        self._serializer = serializer
        self._domain_id = domain_id
        self._clock = clock or SystemClock()
        self._host: str | None = None
        self._last_host_check = None
        self._lock = threading.Lock()

    def populate_source(self, source: Source) -> None:
        source.host = self.host
        source.name = self._name
        source.serializer = self._serializer
        source.uri = self._uri
        if self._domain_id:
            source.domain_id = self._domain_id

    @property
    def host(self) -> str | None:
        with self._lock:
            if self._host is not None:
                return self._host
            now = self._clock.now()
            if self._last_host_check is not None and now - self._last_host_check < self.HOST_CHECK_INTERVAL:
                return None
            try:
                self._host = socket.gethostname() or None
            except OSError as exc:
                logger.debug("source.hostname_lookup_failed error=%s", exc)
            self._last_host_check = now
            return self._host


__all__ = ["HostSourceProvider", "SourceProvider"]
