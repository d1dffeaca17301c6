"""Config – 12-factor settings and loaders."""

from extcall.config.settings import ApiLoggingSettings, EnvSettingsLoader, LogLevel, Settings, SettingsLoader
from extcall.config.validation import ConfigError, InvalidSettingValueError, MissingRequiredSettingError

__all__ = [
    "ApiLoggingSettings",
    "ConfigError",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "LogLevel",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsLoader",
]
