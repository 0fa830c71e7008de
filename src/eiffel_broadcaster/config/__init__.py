"""Configuration – settings dataclasses, loaders and validation errors."""
from eiffel_broadcaster.config.settings import (
    BroadcasterSettings,
    DotenvSettingsLoader,
    EnvSettingsLoader,
    MappingSettingsLoader,
    SettingsFactory,
)
from eiffel_broadcaster.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = [
    "BroadcasterSettings",
    "ConfigError",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "MappingSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "SettingsFactory",
]
