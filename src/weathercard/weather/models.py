"""Typed models for weatherapi.com ``current.json`` responses.

Only the fields shown on the card are required; everything else the API
sends is kept as extra data.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

# ─────────────────────────── primitives ──────────────────────────────────────


class Condition(BaseModel):
    """Weather condition as reported by weatherapi.com."""

    text: str
    icon: str
    code: int | None = None

    @property
    def icon_url(self) -> str:
        """Absolute icon URL.

        The API returns protocol-relative paths such as
        ``//cdn.weatherapi.com/weather/64x64/day/113.png``.
        """
        if self.icon.startswith("//"):
            return f"https:{self.icon}"
        return self.icon


# ─────────────────────────── composite blocks ────────────────────────────────


class Location(BaseModel):
    """Resolved location for the query."""

    name: str
    country: str
    localtime: str
    region: str | None = None
    lat: float | None = None
    lon: float | None = None
    tz_id: str | None = None
    localtime_epoch: int | None = None

    model_config = ConfigDict(extra="allow")

    @property
    def display_name(self) -> str:
        """Name and country as shown in the card heading."""
        return f"{self.name}, {self.country}" if self.country else self.name

    @property
    def local_datetime(self) -> datetime | None:
        """Parse ``localtime`` (``YYYY-MM-DD H:MM``) into a naive datetime."""
        try:
            return datetime.strptime(self.localtime, "%Y-%m-%d %H:%M")
        except ValueError:
            return None


class Current(BaseModel):
    """Current weather conditions."""

    temp_c: float
    feelslike_c: float
    condition: Condition
    humidity: int
    wind_kph: float
    wind_dir: str
    uv: float
    pressure_mb: float
    is_day: int | None = None
    last_updated: str | None = None
    wind_degree: int | None = None

    model_config = ConfigDict(extra="allow")

    @property
    def daytime(self) -> bool:
        return self.is_day != 0


# ─────────────────────────── top-level response ──────────────────────────────


class WeatherResult(BaseModel):
    """Current conditions for one location, parsed from the API response."""

    location: Location
    current: Current

    model_config = ConfigDict(extra="allow")

    @property
    def icon_url(self) -> str:
        return self.current.condition.icon_url

    @property
    def condition_text(self) -> str:
        return self.current.condition.text

    def summary(self) -> dict[str, str | float | int]:
        """Flatten the fields shown on the card into a single mapping."""
        return {
            "name": self.location.name,
            "country": self.location.country,
            "localtime": self.location.localtime,
            "temp_c": self.current.temp_c,
            "feelslike_c": self.current.feelslike_c,
            "condition": self.current.condition.text,
            "icon_url": self.icon_url,
            "humidity": self.current.humidity,
            "wind_kph": self.current.wind_kph,
            "wind_dir": self.current.wind_dir,
            "uv": self.current.uv,
            "pressure_mb": self.current.pressure_mb,
        }


class Coord(BaseModel):
    """Geographic coordinates (latitude, longitude)."""

    lat: float = Field(..., description="Latitude in decimal degrees")
    lon: float = Field(..., description="Longitude in decimal degrees")
