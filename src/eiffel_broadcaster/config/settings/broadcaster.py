"""Config settings – Settings base class and BroadcasterSettings."""
from __future__ import annotations

import dataclasses

from eiffel_broadcaster.config.validation import InvalidSettingValueError
from eiffel_broadcaster.delivery.settings import AMQP_SCHEMES, ConnectionSettings, has_amqp_scheme
from eiffel_broadcaster.events.algorithms import HashAlgorithm

ROUTING_KEY_PROVIDERS = ("sepia", "fixed")


@dataclasses.dataclass
class Settings:
    """Base class for 12-factor settings."""

    _prefix: dataclasses.ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""


@dataclasses.dataclass
class BroadcasterSettings(Settings):
    """Global configuration of the event broadcaster.

    Loaded from ``EIFFEL_*`` environment variables by ``EnvSettingsLoader``.
    Publishing is a no-op while ``enabled`` is false.
    """

    _prefix: dataclasses.ClassVar[str] = "EIFFEL"

    enabled: bool = False
    server_uri: str = "amqp://localhost"
    virtual_host: str | None = None
    user_name: str | None = None
    user_password: str | None = dataclasses.field(default=None, repr=False)
    exchange_name: str = "eiffel"
    app_id: str | None = None
    persistent_delivery: bool = True
    routing_key_provider: str = "sepia"
    fixed_routing_key: str | None = None
    sepia_tag: str | None = None
    system_signing_enabled: bool = False
    system_signing_credentials_id: str | None = None
    system_signing_hash_alg: str = HashAlgorithm.SHA_256.value

    def _validate(self) -> None:
        self.server_uri = self.server_uri.strip().rstrip("/")
        if not has_amqp_scheme(self.server_uri):
            raise InvalidSettingValueError(
                "server_uri", self.server_uri, f"scheme must be one of {', '.join(AMQP_SCHEMES)}"
            )
        if not self.exchange_name:
            raise InvalidSettingValueError("exchange_name", self.exchange_name, "must not be empty")
        if self.routing_key_provider not in ROUTING_KEY_PROVIDERS:
            raise InvalidSettingValueError(
                "routing_key_provider",
                self.routing_key_provider,
                f"must be one of {', '.join(ROUTING_KEY_PROVIDERS)}",
            )
        if self.routing_key_provider == "fixed" and not (self.fixed_routing_key or "").strip():
            raise InvalidSettingValueError(
                "fixed_routing_key", self.fixed_routing_key, "the routing key must be a non-empty string"
            )
        try:
            HashAlgorithm.from_string(self.system_signing_hash_alg)
        except ValueError as exc:
            raise InvalidSettingValueError("system_signing_hash_alg", self.system_signing_hash_alg, str(exc)) from exc
        if self.system_signing_enabled and not self.system_signing_credentials_id:
            raise InvalidSettingValueError(
                "system_signing_credentials_id", None, "required when system signing is enabled"
            )

    @property
    def hash_algorithm(self) -> HashAlgorithm:
        return HashAlgorithm.from_string(self.system_signing_hash_alg)

    @property
    def delivery_mode(self) -> int:
        """AMQP delivery mode: 2 is persistent, 1 is transient."""
        return 2 if self.persistent_delivery else 1

    def to_connection_settings(self) -> ConnectionSettings:
        return ConnectionSettings(
            uri=self.server_uri,
            virtual_host=self.virtual_host,
            user_name=self.user_name,
            password=self.user_password,
        )


__all__ = ["BroadcasterSettings", "ROUTING_KEY_PROVIDERS", "Settings"]
