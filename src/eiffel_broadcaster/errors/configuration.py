"""Configuration errors: the user must fix something, never retried automatically."""

from __future__ import annotations

from typing import Any

from eiffel_broadcaster.errors.base import BroadcasterError


class ConfigurationError(BroadcasterError):
    """Invalid or missing configuration."""

    default_code = "configuration_error"


class InvalidCredentialConfigurationError(ConfigurationError):
    """The key container of a signing credential is unusable.

    Raised when the keystore is empty, holds no private key, or holds no
    X.509 certificate from which an identity can be derived.
    """

    default_code = "invalid_credential_configuration"


class CredentialNotFoundError(ConfigurationError):
    """No credential with the requested id is visible in the given scope."""

    default_code = "credential_not_found"

    def __init__(self, credential_id: str, **kwargs: Any) -> None:
        super().__init__(f"No credentials with the id {credential_id} could be found", **kwargs)
        self.credential_id = credential_id


__all__ = [
    "ConfigurationError",
    "CredentialNotFoundError",
    "InvalidCredentialConfigurationError",
]
