"""Weather package - holds API client, response models, queries and errors."""

from .api import WeatherAPI
from .errors import (
    AuthenticationError,
    ClientError,
    HTTPStatusError,
    LocationValidationError,
    NetworkError,
    NotFoundError,
    ParseError,
    RateLimitError,
    ServerError,
    WeatherAPIError,
)
from .models import Condition, Coord, Current, Location, WeatherResult
from .query import CityQuery, CoordinateQuery, LocationQuery, build_query_string, parse_coordinate

# Define what gets imported with: from weathercard.weather import *
__all__ = [
    "AuthenticationError",
    "CityQuery",
    "ClientError",
    "Condition",
    "Coord",
    "CoordinateQuery",
    "Current",
    "HTTPStatusError",
    "Location",
    "LocationQuery",
    "LocationValidationError",
    "NetworkError",
    "NotFoundError",
    "ParseError",
    "RateLimitError",
    "ServerError",
    "WeatherAPI",
    "WeatherAPIError",
    "WeatherResult",
    "build_query_string",
    "parse_coordinate",
]
