"""Config settings – 12-factor env-based configuration."""
from extcall.config.settings.api_logging import ApiLoggingSettings, LogLevel
from extcall.config.settings.base import Settings
from extcall.config.settings.factory import SettingsFactory
from extcall.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader

__all__ = [
    "ApiLoggingSettings",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "LogLevel",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
]
