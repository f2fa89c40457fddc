"""Config settings – FitviewSettings, the library's own configuration."""
from __future__ import annotations

import dataclasses
from typing import ClassVar

from fitview.config.settings.base import Settings
from fitview.config.settings.factory import SettingsFactory
from fitview.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader
from fitview.config.validation import InvalidSettingValueError

_PAGE_SIZE_FIELDS = (
    "classes_page_size",
    "posts_page_size",
    "trainers_page_size",
    "subscribers_page_size",
)


@dataclasses.dataclass
class FitviewSettings(Settings):
    _prefix: ClassVar[str] = "FITVIEW"

    api_base_url: str = "http://localhost:3000"
    request_timeout: float = 10.0
    stale_seconds: float = 300.0
    log_level: str = "INFO"
    log_json: bool = True
    classes_page_size: int = 6
    posts_page_size: int = 6
    trainers_page_size: int = 8
    subscribers_page_size: int = 10

    def _validate(self) -> None:
        if not self.api_base_url.startswith(("http://", "https://")):
            raise InvalidSettingValueError("api_base_url", self.api_base_url, "must be an http(s) URL")
        if self.request_timeout <= 0:
            raise InvalidSettingValueError("request_timeout", self.request_timeout, "must be positive")
        if self.stale_seconds < 0:
            raise InvalidSettingValueError("stale_seconds", self.stale_seconds, "must not be negative")
        for name in _PAGE_SIZE_FIELDS:
            if getattr(self, name) < 1:
                raise InvalidSettingValueError(name, getattr(self, name), "must be >= 1")


def load_settings(env_file: str | None = None, **overrides: object) -> FitviewSettings:
    """Build settings from the environment, an optional ``.env`` file and overrides."""
    loaders = [DotenvSettingsLoader(env_file)] if env_file else [EnvSettingsLoader()]
    return SettingsFactory.create(FitviewSettings, loaders=loaders, overrides=dict(overrides))


__all__ = ["FitviewSettings", "load_settings"]
