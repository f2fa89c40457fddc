"""Config settings – environment-based configuration."""
from fitview.config.settings.base import Settings
from fitview.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader
from fitview.config.settings.factory import SettingsFactory
from fitview.config.settings.app import FitviewSettings, load_settings

__all__ = [
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "FitviewSettings",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
    "load_settings",
]
