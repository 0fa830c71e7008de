"""Config settings – 12-factor env-based configuration."""
from eiffel_broadcaster.config.settings.broadcaster import BroadcasterSettings, Settings
from eiffel_broadcaster.config.settings.factory import SettingsFactory
from eiffel_broadcaster.config.settings.loaders import (
    DotenvSettingsLoader,
    EnvSettingsLoader,
    MappingSettingsLoader,
    SettingsLoader,
)

__all__ = [
    "BroadcasterSettings",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "MappingSettingsLoader",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
]
