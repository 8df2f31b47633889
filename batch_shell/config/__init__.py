"""Configuration management module."""

from batch_shell.config.loader import get_settings, load_config, reset_settings
from batch_shell.config.settings import LoggingSettings, Settings, ShellSettings

__all__ = [
    "Settings",
    "ShellSettings",
    "LoggingSettings",
    "load_config",
    "get_settings",
    "reset_settings",
]
