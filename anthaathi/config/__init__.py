"""Configuration package."""

from anthaathi.config.settings import (
    AppSettings,
    Settings,
    StorageSettings,
    WeatherSettings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "Settings",
    "StorageSettings",
    "WeatherSettings",
    "get_settings",
    "validate_all_settings",
]
