"""Location selection: typed city/coordinates or a click on the map."""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum
from typing import Final

from weathercard.weather.errors import LocationValidationError
from weathercard.weather.models import Coord
from weathercard.weather.query import CityQuery, CoordinateQuery, LocationQuery, parse_coordinate

logger: Final = logging.getLogger(__name__)

LocationListener = Callable[[CoordinateQuery], None]


class InputMode(Enum):
    """Mutually exclusive ways of choosing a location."""

    MANUAL = "manual"  # city name and/or typed coordinates
    MAP = "map"  # single click on the interactive map

    @property
    def toggled(self) -> InputMode:
        return InputMode.MAP if self is InputMode.MANUAL else InputMode.MANUAL


class LocationSelector:
    """Holds the pending location input for the card.

    In manual mode the user types a city name and may also type a
    latitude/longitude pair; a complete pair takes precedence over the
    name. In map mode each click replaces the marker and notifies the
    registered listeners, which normally start a lookup straight away.
    """

    def __init__(self, mode: InputMode = InputMode.MANUAL) -> None:
        self.mode = mode
        self.city_name = ""
        self.lat: float | None = None
        self.lon: float | None = None
        self.marker: Coord | None = None
        self._listeners: list[LocationListener] = []

    # ---- listeners ----
    def on_location_selected(self, listener: LocationListener) -> None:
        """Register a callback fired once per map click."""
        self._listeners.append(listener)

    # ---- input ----
    def clear(self) -> None:
        self.city_name = ""
        self.lat = None
        self.lon = None
        self.marker = None

    def toggle_mode(self) -> InputMode:
        """Switch input mode and drop everything typed or clicked so far."""
        self.mode = self.mode.toggled
        self.clear()
        logger.debug("Input mode switched to %s", self.mode.value)
        return self.mode

    def set_city(self, name: str) -> None:
        self.city_name = name

    def set_coordinates(self, lat: float | None, lon: float | None) -> None:
        self.lat = lat
        self.lon = lon

    def set_coordinate_text(self, lat_text: str | None, lon_text: str | None) -> None:
        """Set coordinates from typed text; blank fields clear the value.

        Typed coordinates replace any map marker.

        Raises:
            LocationValidationError: If either field is not a number
        """
        self.set_coordinates(parse_coordinate(lat_text), parse_coordinate(lon_text))
        self.marker = None

    def click_map(self, lat: float, lon: float) -> CoordinateQuery:
        """Register a map click at ``(lat, lon)``.

        Replaces any previous marker, updates the coordinates and notifies
        listeners exactly once.

        Raises:
            RuntimeError: If the selector is not in map mode
        """
        if self.mode is not InputMode.MAP:
            raise RuntimeError("Map clicks are only accepted in map mode")

        self.marker = Coord(lat=lat, lon=lon)
        self.set_coordinates(lat, lon)
        query = CoordinateQuery(lat=lat, lon=lon)
        logger.debug("Map location selected: %s", query.to_query_string())

        for listener in list(self._listeners):
            listener(query)
        return query

    # ---- query ----
    @property
    def has_coordinates(self) -> bool:
        return self.lat is not None and self.lon is not None

    def build_query(self) -> LocationQuery:
        """Resolve the current input into a query.

        Returns:
            CoordinateQuery when both coordinates are set, else CityQuery

        Raises:
            LocationValidationError: If neither a complete coordinate pair
                nor a non-blank city name is available
        """
        if self.lat is not None and self.lon is not None:
            return CoordinateQuery(lat=self.lat, lon=self.lon)
        if self.city_name.strip():
            return CityQuery(city_name=self.city_name)
        raise LocationValidationError()
