"""Weather services package."""

from anthaathi.services.weather.openweather_service import (
    WeatherService,
    WeatherUnavailableError,
    parse_current_weather,
)

__all__ = [
    "WeatherService",
    "WeatherUnavailableError",
    "parse_current_weather",
]
