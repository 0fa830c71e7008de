"""Config settings – SettingsFactory."""
from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, TypeVar

from eiffel_broadcaster.config.settings.loaders import SettingsLoader, build_settings
from eiffel_broadcaster.config.validation import ConfigError

T = TypeVar("T")
logger = logging.getLogger(__name__)


class SettingsFactory:
    """Stack settings sources into one settings object.

    Every loader contributes only the variables it actually finds, so a
    ``.env`` file can set ``EIFFEL_SERVER_URI`` while the environment sets
    ``EIFFEL_ENABLED`` without either masking the other.  Later loaders win
    on the same field and *overrides* win over every loader.  A loader that
    raises ``ConfigError`` is logged and left out.
    """

    @staticmethod
    def create(
        settings_cls: type[T],
        loaders: Sequence[SettingsLoader] | None = None,
        overrides: dict[str, Any] | None = None,
    ) -> T:
        layered: dict[str, Any] = {}
        for loader in loaders or ():
            try:
                layered.update(loader.values(settings_cls))
            except ConfigError as exc:
                logger.warning("settings.loader_skipped loader=%s error=%s", type(loader).__name__, exc.message)
        layered.update(overrides or {})
        return build_settings(settings_cls, layered)


__all__ = ["SettingsFactory"]
