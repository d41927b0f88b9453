"""
Weather Models for Anthaathi

A weather snapshot is fetched per visit to the weather screen and
never persisted.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class WeatherSnapshot(BaseModel):
    """Current conditions for one place, already converted for display."""

    temp: int = Field(..., description="Temperature in °C")
    feels_like: int = Field(..., description="Apparent temperature in °C")
    humidity: int = Field(..., ge=0, le=100, description="Relative humidity in %")
    wind_speed: int = Field(..., ge=0, description="Wind speed in km/h")
    rain_chance: int = Field(..., ge=0, le=100, description="Rain indicator in %")
    condition: str = Field(..., description="Short condition name, e.g. 'Clouds'")
    location: str = Field(..., description="'<city>, <country or state>'")

    fetched_at: datetime = Field(default_factory=datetime.now)

    # The fallback reading looks like a real one; this flag is the only
    # way to tell them apart.
    is_fallback: bool = Field(
        default=False,
        description="True when the live fetch failed and sample data is shown"
    )


def fallback_snapshot() -> WeatherSnapshot:
    """The fixed reading shown when the live weather fetch fails."""
    return WeatherSnapshot(
        temp=28,
        feels_like=32,
        humidity=72,
        wind_speed=14,
        rain_chance=45,
        condition="Partly Cloudy",
        location="Chennai, Tamil Nadu",
        is_fallback=True,
    )
