"""Config – settings, loaders, and validation errors."""

from fitview.config.settings import (
    DotenvSettingsLoader,
    EnvSettingsLoader,
    FitviewSettings,
    Settings,
    SettingsFactory,
    SettingsLoader,
    load_settings,
)
from fitview.config.validation import ConfigError, InvalidSettingValueError, MissingRequiredSettingError

__all__ = [
    "ConfigError",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "FitviewSettings",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
    "load_settings",
]
