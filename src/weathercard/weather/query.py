"""Location queries sent to the weather API."""

from __future__ import annotations

from decimal import Decimal
from typing import Union

from pydantic import BaseModel, ConfigDict, field_validator

from weathercard.weather.errors import LocationValidationError


class CityQuery(BaseModel):
    """Lookup by free-text city name."""

    city_name: str

    model_config = ConfigDict(frozen=True)

    @field_validator("city_name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("city name must not be blank")
        return v

    def to_query_string(self) -> str:
        return self.city_name


class CoordinateQuery(BaseModel):
    """Lookup by latitude/longitude, e.g. from a map click."""

    lat: float
    lon: float

    model_config = ConfigDict(frozen=True)

    def to_query_string(self) -> str:
        return f"{plain_decimal(self.lat)},{plain_decimal(self.lon)}"


def plain_decimal(value: float) -> str:
    """Shortest round-trip decimal text, never in exponent form.

    ``4e-05`` becomes ``"0.00004"``; ``51.5074`` stays ``"51.5074"``.
    """
    return format(Decimal(repr(value)), "f")


LocationQuery = Union[CityQuery, CoordinateQuery]


def build_query_string(query: LocationQuery) -> str:
    """Return the ``q`` parameter for a location query."""
    return query.to_query_string()


def parse_coordinate(text: str | None) -> float | None:
    """Parse a typed latitude or longitude.

    Args:
        text: Raw input; blank or None means "not set"

    Returns:
        The parsed value, or None when the input is blank

    Raises:
        LocationValidationError: If the input is not a finite number
    """
    if text is None or not text.strip():
        return None
    try:
        value = float(text.strip())
    except ValueError as exc:
        raise LocationValidationError(f"Invalid coordinate: {text.strip()!r}") from exc
    if value != value or value in (float("inf"), float("-inf")):
        raise LocationValidationError(f"Invalid coordinate: {text.strip()!r}")
    return value
