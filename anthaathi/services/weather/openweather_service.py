"""
Weather Service using OpenWeatherMap

This service handles:
1. One GET to the current-weather endpoint per call
2. Converting the response to display units (°C, km/h, %)
3. Falling back to a fixed sample reading on ANY failure

DESIGN DECISION: The weather screen must always show something. A
failed fetch (no key, network error, non-2xx status, unexpected body)
never reaches the user as an error. It is logged, audited, and the
sample reading is returned with `is_fallback=True` so the UI can label
it. There is no retry.
"""

import math
from typing import Any, Optional

import httpx
import structlog
from pydantic import ValidationError

from anthaathi.audit import AuditLogger
from anthaathi.config import WeatherSettings, get_settings
from anthaathi.models.weather import WeatherSnapshot, fallback_snapshot


logger = structlog.get_logger(__name__)


class WeatherUnavailableError(Exception):
    """The live reading could not be obtained or understood."""
    pass


def round_half_up(value: float) -> int:
    """Round halves upwards (28.5 -> 29), unlike the built-in round()."""
    return int(math.floor(value + 0.5))


def parse_current_weather(payload: Any) -> WeatherSnapshot:
    """
    Convert an OpenWeatherMap current-weather body to a snapshot.

    Raises:
        WeatherUnavailableError: If the body does not have the expected shape
    """
    try:
        main = payload["main"]
        rain = payload.get("rain") or {}
        rain_mm = rain.get("1h") or rain.get("3h") or 0

        return WeatherSnapshot(
            temp=round_half_up(main["temp"]),
            feels_like=round_half_up(main["feels_like"]),
            humidity=main["humidity"],
            # m/s to km/h
            wind_speed=round_half_up(payload["wind"]["speed"] * 3.6),
            rain_chance=min(round_half_up(rain_mm * 10), 100),
            condition=payload["weather"][0]["main"],
            location=f"{payload['name']}, {payload['sys']['country']}",
        )
    except (KeyError, IndexError, TypeError, AttributeError, ValidationError) as e:
        raise WeatherUnavailableError(f"Unexpected weather response: {e}") from e


class WeatherService:
    """
    Fetches current conditions for a city.

    The HTTP client may be shared and injected (tests pass one built on
    httpx.MockTransport); otherwise a client is opened per call.
    """

    def __init__(
        self,
        settings: Optional[WeatherSettings] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._settings = settings or get_settings().weather
        self._client = http_client
        self._audit_logger = audit_logger

    async def _get(self, params: dict) -> httpx.Response:
        url = f"{self._settings.base_url.rstrip('/')}/weather"
        if self._client is not None:
            return await self._client.get(url, params=params)
        async with httpx.AsyncClient() as client:
            return await client.get(url, params=params)

    async def fetch_live(self, city: Optional[str] = None) -> WeatherSnapshot:
        """
        Fetch the live reading.

        Raises:
            WeatherUnavailableError: On a missing key, transport error,
                non-2xx status or malformed body
        """
        city = city or self._settings.default_city
        if not self._settings.api_key:
            raise WeatherUnavailableError("OPENWEATHER_API_KEY is not set")

        params = {
            "q": city,
            "appid": self._settings.api_key,
            "units": self._settings.units,
        }
        try:
            response = await self._get(params)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            raise WeatherUnavailableError(
                f"Weather API returned {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise WeatherUnavailableError(f"Weather request failed: {e}") from e
        except ValueError as e:
            raise WeatherUnavailableError(f"Weather response is not JSON: {e}") from e

        return parse_current_weather(payload)

    async def fetch_weather(self, city: Optional[str] = None) -> WeatherSnapshot:
        """
        Current conditions for `city` (default from settings).

        Never raises: returns the sample reading if the live fetch fails.
        """
        city = city or self._settings.default_city
        try:
            snapshot = await self.fetch_live(city)
        except WeatherUnavailableError as e:
            logger.warning("weather_fallback", city=city, error=str(e))
            if self._audit_logger:
                await self._audit_logger.log_weather_fallback(city, str(e))
            return fallback_snapshot()

        logger.info("weather_fetched", city=city, location=snapshot.location)
        if self._audit_logger:
            await self._audit_logger.log_weather_fetched(city, snapshot.location)
        return snapshot
