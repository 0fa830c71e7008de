"""Config settings – sources of ``EIFFEL_*`` values.

A loader maps prefixed string variables onto the fields of a settings
dataclass.  ``values()`` reports only what the source actually sets, which
lets ``SettingsFactory`` stack several sources on top of each other.
"""
from __future__ import annotations

import abc
import dataclasses
import os
from collections.abc import Mapping
from typing import Any, TypeVar

from eiffel_broadcaster.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

T = TypeVar("T")

_TRUTHY = ("1", "true", "yes", "on")
_FALSY = ("0", "false", "no", "off", "")


def variable_name(settings_class: type, field_name: str) -> str:
    """``server_uri`` on a class with ``_prefix = "EIFFEL"`` is ``EIFFEL_SERVER_URI``."""
    prefix = getattr(settings_class, "_prefix", "")
    return f"{prefix}_{field_name}".upper().lstrip("_")


def build_settings(settings_class: type[T], values: Mapping[str, Any]) -> T:
    """Instantiate *settings_class* from already coerced *values*.

    Raises:
        MissingRequiredSettingError: A field without default is absent.
        ConfigError: The dataclass rejected the values, e.g. an unknown field.
    """
    for field in dataclasses.fields(settings_class):  # type: ignore[arg-type]
        if field.name in values:
            continue
        if field.default is dataclasses.MISSING and field.default_factory is dataclasses.MISSING:
            raise MissingRequiredSettingError(variable_name(settings_class, field.name))
    try:
        return settings_class(**values)
    except ConfigError:
        raise
    except Exception as exc:
        raise ConfigError(f"Failed to construct {settings_class.__name__}: {exc}", cause=exc) from exc


def coerce(name: str, raw: str, type_hint: Any) -> Any:
    """Convert the string *raw* to the field type named by *type_hint*.

    Handles ``bool``, ``int`` and ``str`` plus their ``| None`` forms, where
    a blank value means ``None``.
    """
    hint = type_hint.__name__ if isinstance(type_hint, type) else str(type_hint).replace(" ", "")
    if hint.endswith("|None"):
        if not raw.strip():
            return None
        hint = hint[: -len("|None")]
    if hint == "bool":
        lowered = raw.strip().lower()
        if lowered in _TRUTHY:
            return True
        if lowered in _FALSY:
            return False
        raise InvalidSettingValueError(name, raw, "expected a boolean")
    if hint == "int":
        try:
            return int(raw)
        except ValueError as exc:
            raise InvalidSettingValueError(name, raw, "expected an integer") from exc
    return raw


class SettingsLoader(abc.ABC):
    """Port: one source of settings values."""

    @abc.abstractmethod
    def values(self, settings_class: type) -> dict[str, Any]:
        """Return the coerced values this source provides, keyed by field name."""

    def load(self, settings_class: type[T]) -> T:
        return build_settings(settings_class, self.values(settings_class))


class MappingSettingsLoader(SettingsLoader):
    """Read prefixed variables from any string mapping."""

    def __init__(self, variables: Mapping[str, str | None]) -> None:
        self._variables = variables

    def variables(self) -> Mapping[str, str | None]:
        return self._variables

    def values(self, settings_class: type) -> dict[str, Any]:
        variables = self.variables()
        found: dict[str, Any] = {}
        for field in dataclasses.fields(settings_class):
            name = variable_name(settings_class, field.name)
            raw = variables.get(name)
            if raw is not None:
                found[field.name] = coerce(name, raw, field.type)
        return found


class EnvSettingsLoader(MappingSettingsLoader):
    """Read settings from the process environment."""

    def __init__(self) -> None:
        super().__init__(os.environ)


class DotenvSettingsLoader(MappingSettingsLoader):
    """Read settings from a ``.env`` file layered with the process environment.

    The environment wins over the file unless *override* is set.  The file is
    re-read on every call and ``os.environ`` is never modified.
    """

    def __init__(self, env_file: str = ".env", override: bool = False) -> None:
        super().__init__({})
        self._env_file = env_file
        self._override = override

    def variables(self) -> Mapping[str, str | None]:
        from dotenv import dotenv_values

        from_file = {k: v for k, v in dotenv_values(self._env_file).items() if v is not None}
        if self._override:
            return {**os.environ, **from_file}
        return {**from_file, **os.environ}


__all__ = [
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "MappingSettingsLoader",
    "SettingsLoader",
    "build_settings",
    "coerce",
    "variable_name",
]
