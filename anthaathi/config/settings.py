"""
Configuration Management for Anthaathi

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
This makes it easy to see what external dependencies exist and
ensures all required configuration is validated at startup.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class WeatherSettings(BaseSettings):
    """OpenWeatherMap configuration."""

    model_config = SettingsConfigDict(
        env_prefix="OPENWEATHER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    api_key: Optional[str] = Field(
        default=None,
        description="OpenWeatherMap API key"
    )
    base_url: str = Field(
        default="https://api.openweathermap.org/data/2.5",
        description="Base URL of the current weather API"
    )
    default_city: str = Field(
        default="Chennai",
        description="City used when the user has not set a location"
    )
    units: str = Field(
        default="metric",
        description="Unit system passed to the API"
    )


class StorageSettings(BaseSettings):
    """On-device key-value storage configuration."""

    model_config = SettingsConfigDict(
        env_prefix="STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    data_dir: Path = Field(
        default=Path.home() / ".anthaathi",
        description="Directory holding the storage file"
    )
    file_name: str = Field(
        default="storage.json",
        description="Name of the JSON document holding all keys"
    )

    # Keys in the flat storage namespace
    user_key: str = Field(default="user")
    language_key: str = Field(default="language")
    expenses_key: str = Field(default="expenses")

    @property
    def storage_path(self) -> Path:
        """Full path of the storage document."""
        return self.data_dir / self.file_name


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )

    default_language: str = Field(
        default="en",
        description="Language used until the user picks one"
    )

    # Simulated backend latency (seconds)
    splash_delay_seconds: float = Field(
        default=1.5,
        ge=0.0,
        le=10.0,
        description="How long the splash screen stays up"
    )
    otp_send_delay_seconds: float = Field(default=1.0, ge=0.0, le=10.0)
    otp_verify_delay_seconds: float = Field(default=0.8, ge=0.0, le=10.0)
    diagnosis_delay_seconds: float = Field(default=2.0, ge=0.0, le=10.0)
    chat_reply_delay_seconds: float = Field(default=1.2, ge=0.0, le=10.0)

    @field_validator('default_language')
    @classmethod
    def validate_default_language(cls, v: str) -> str:
        """Only the two bundled dictionaries can be the default."""
        v = v.strip().lower()
        if v not in ("en", "ta"):
            raise ValueError(f"Unsupported default language: {v}. Use 'en' or 'ta'")
        return v


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def weather(self) -> WeatherSettings:
        return WeatherSettings()

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}.
    A missing weather API key is reported as invalid because the
    weather screen then always shows sample data.
    """
    results = {}

    settings = get_settings()

    try:
        weather = settings.weather
        results["weather"] = bool(weather.api_key)
        if not weather.api_key:
            results["weather_error"] = "OPENWEATHER_API_KEY is not set"
    except Exception as e:
        results["weather"] = False
        results["weather_error"] = str(e)

    try:
        _ = settings.storage
        results["storage"] = True
    except Exception as e:
        results["storage"] = False
        results["storage_error"] = str(e)

    try:
        _ = settings.app
        results["app"] = True
    except Exception as e:
        results["app"] = False
        results["app_error"] = str(e)

    return results
