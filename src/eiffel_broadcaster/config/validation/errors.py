"""Config validation – errors raised while loading or validating settings."""
from __future__ import annotations

from eiffel_broadcaster.errors import ConfigurationError

_SECRET_MARKERS = ("password", "secret")


def _display(setting_name: str, value: object) -> str:
    if value and any(marker in setting_name.lower() for marker in _SECRET_MARKERS):
        return "'********'"
    return repr(value)


class ConfigError(ConfigurationError):
    """Settings could not be loaded or failed cross-field validation."""

    default_code = "config_error"


class MissingRequiredSettingError(ConfigError):
    """No source provided a value for a setting that has no default."""

    default_code = "missing_required_setting"

    def __init__(self, setting_name: str) -> None:
        super().__init__(
            f"The setting {setting_name} is required but no source provided it",
            detail={"setting": setting_name},
        )
        self.setting_name = setting_name


class InvalidSettingValueError(ConfigError):
    """A setting holds a value the broadcaster can't use.

    Values of password-like settings are masked in the message and never
    copied into ``detail``.
    """

    default_code = "invalid_setting_value"

    def __init__(self, setting_name: str, value: object, reason: str) -> None:
        super().__init__(
            f"Invalid value {_display(setting_name, value)} for {setting_name}: {reason}",
            detail={"setting": setting_name, "reason": reason},
        )
        self.setting_name = setting_name
        self.value = value
        self.reason = reason


__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError"]
