"""Config settings – SettingsFactory."""
from __future__ import annotations

from typing import Any, Sequence, TypeVar

from fitview.config.settings.base import Settings
from fitview.config.settings.loaders import SettingsLoader
from fitview.config.validation.errors import (
    ConfigError,
    MissingRequiredSettingError,
)
from fitview.observability.logging import get_logger

T = TypeVar("T", bound=Settings)

logger = get_logger(__name__)


class SettingsFactory:
    """Build one settings object from several sources.

    Sources are merged left to right, then *overrides* on top. A loader
    that cannot satisfy the required fields on its own is skipped with a
    warning; the merged result must still provide them.
    """

    @staticmethod
    def create(
        settings_cls: type[T],
        loaders: Sequence[SettingsLoader] | None = None,
        overrides: dict[str, Any] | None = None,
    ) -> T:
        """
        Raises
        ------
        MissingRequiredSettingError
            A field without default is absent from every source.
        InvalidSettingValueError
            A merged value fails the settings class validation.
        ConfigError
            Any other construction failure (e.g. an unknown override).
        """
        merged: dict[str, Any] = {}
        sources: list[str] = []

        for loader in loaders or []:
            try:
                merged.update(loader.load(settings_cls).as_dict())
            except MissingRequiredSettingError as exc:
                logger.warning("settings_loader_skipped", loader=type(loader).__name__, setting=exc.setting_name)
                continue
            sources.append(type(loader).__name__)

        merged.update(overrides or {})

        missing = [name for name in settings_cls.required_fields() if name not in merged]
        if missing:
            raise MissingRequiredSettingError(missing[0])

        try:
            settings = settings_cls(**merged)
        except ConfigError:
            raise
        except Exception as exc:
            raise ConfigError(f"Failed to construct {settings_cls.__name__}: {exc}", cause=exc) from exc
        logger.debug("settings_loaded", settings=settings_cls.__name__, sources=sources)
        return settings


__all__ = ["SettingsFactory"]
