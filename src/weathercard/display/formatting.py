"""Display-specific formatting utilities."""

from __future__ import annotations


def format_temperature(temp: float, unit: str = "°C") -> str:
    """Format temperature value with unit.

    Args:
        temp: Temperature value
        unit: Temperature unit

    Returns:
        Formatted temperature string
    """
    return f"{temp:g}{unit}"


def format_wind(speed_kph: float, direction: str) -> str:
    """Format wind speed and compass direction (e.g. "13 km/h WSW")."""
    return f"{speed_kph:g} km/h {direction}".rstrip()


def format_pressure(pressure_mb: float) -> str:
    """Format pressure in millibars (hPa)."""
    return f"{pressure_mb:g} mb"


def format_percentage(value: float) -> str:
    """Format a 0-100 value as a percentage."""
    return f"{round(value)}%"


def format_coordinate(value: float | None) -> str:
    """Four decimal places for the coordinate inputs; blank when unset."""
    return "" if value is None else f"{value:.4f}"
