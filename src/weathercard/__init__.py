"""Weather card: look up current conditions by city name or map click."""

__version__ = "0.1.0"

from weathercard.controller import WeatherCard
from weathercard.selector import InputMode, LocationSelector
from weathercard.state import Error, Idle, Loading, RequestState, RequestStore, Success

__all__ = [
    "Error",
    "Idle",
    "InputMode",
    "Loading",
    "LocationSelector",
    "RequestState",
    "RequestStore",
    "Success",
    "WeatherCard",
]
