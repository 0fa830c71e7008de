"""Testing fixtures – pytest fixtures for the broadcaster's building blocks.

Enable with ``pytest_plugins = ["eiffel_broadcaster.testing.fixtures"]``.
"""
from __future__ import annotations

import pytest

from eiffel_broadcaster.clock import FrozenClock
from eiffel_broadcaster.config.settings import BroadcasterSettings
from eiffel_broadcaster.credentials import CredentialScope, InMemoryCredentialStore
from eiffel_broadcaster.events import EventFactory
from eiffel_broadcaster.signing import SigningKeyCache
from eiffel_broadcaster.testing.credentials import GeneratedCredential, generate_credential
from eiffel_broadcaster.testing.fakes import RecordingDeliveryEngine

SYSTEM_CREDENTIALS_ID = "system-signing"


@pytest.fixture
def frozen_clock() -> FrozenClock:
    """A FrozenClock pinned to 2026-01-01 12:00 UTC."""
    return FrozenClock()


@pytest.fixture(scope="session")
def ec_credential() -> GeneratedCredential:
    return generate_credential(SYSTEM_CREDENTIALS_ID, key_type="EC", size=256, scope=CredentialScope.SYSTEM)


@pytest.fixture
def credential_store(ec_credential: GeneratedCredential) -> InMemoryCredentialStore:
    store = InMemoryCredentialStore()
    store.add(ec_credential.credential)
    return store


@pytest.fixture
def key_cache(credential_store: InMemoryCredentialStore, frozen_clock: FrozenClock) -> SigningKeyCache:
    cache = SigningKeyCache(credential_store, frozen_clock)
    credential_store.add_listener(cache.clear)
    return cache


@pytest.fixture
def broadcaster_settings() -> BroadcasterSettings:
    return BroadcasterSettings(enabled=True, app_id="eiffel-broadcaster-tests")


@pytest.fixture
def recording_engine() -> RecordingDeliveryEngine:
    return RecordingDeliveryEngine()


@pytest.fixture
def event_factory(frozen_clock: FrozenClock) -> EventFactory:
    return EventFactory(clock=frozen_clock)


__all__ = [
    "SYSTEM_CREDENTIALS_ID",
    "broadcaster_settings",
    "credential_store",
    "ec_credential",
    "event_factory",
    "frozen_clock",
    "key_cache",
    "recording_engine",
]
