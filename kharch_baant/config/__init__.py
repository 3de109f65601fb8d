"""Configuration package."""

from kharch_baant.config.keys import (
    CRITICAL_KEY,
    OPTIONAL_KEYS,
    REQUIRED_KEYS,
)
from kharch_baant.config.resolver import ConfigResolver, EnvironmentSnapshot
from kharch_baant.config.settings import (
    ExecutionMode,
    RuntimeSettings,
    SettingsLoadError,
    config_load_settings,
    get_settings,
)

__all__ = [
    "CRITICAL_KEY",
    "OPTIONAL_KEYS",
    "REQUIRED_KEYS",
    "ConfigResolver",
    "EnvironmentSnapshot",
    "ExecutionMode",
    "RuntimeSettings",
    "SettingsLoadError",
    "config_load_settings",
    "get_settings",
]
