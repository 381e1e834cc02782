"""Card rendering components."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional, cast

from jinja2 import Environment, FileSystemLoader, Template, select_autoescape

from weathercard.controller import WeatherCard
from weathercard.display.formatting import (
    format_coordinate,
    format_percentage,
    format_pressure,
    format_temperature,
    format_wind,
)
from weathercard.selector import InputMode
from weathercard.state import Error, Loading, RequestState, Success
from weathercard.weather.models import WeatherResult

TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"


class TemplateRenderer:
    """Handles the Jinja2 environment for the card page.

    Registers the formatting helpers as filters so templates only deal
    with raw values from the API.
    """

    page_template: Template

    def __init__(self, templates_dir: Optional[Path] = None) -> None:
        """Initialize the template renderer.

        Args:
            templates_dir: Directory containing templates (default: packaged templates)
        """
        self.templates_dir = templates_dir or TEMPLATES_DIR

        self.env = Environment(
            loader=FileSystemLoader(self.templates_dir),
            autoescape=select_autoescape(["html", "j2"]),
        )
        self._register_filters()

        self.page_template = self.env.get_template("page.html.j2")

    def _register_filters(self) -> None:
        """Register custom filters with the Jinja environment."""
        self.env.filters.update(
            {
                "temperature": format_temperature,
                "percentage": format_percentage,
                "pressure": format_pressure,
                "coordinate": format_coordinate,
            }
        )

    def render_page(self, **context: Any) -> str:
        return cast(str, self.page_template.render(**context))


class CardRenderer:
    """Builds the page context from a WeatherCard and renders it."""

    def __init__(self, templates: Optional[TemplateRenderer] = None) -> None:
        self.templates = templates or TemplateRenderer()

    def build_context(self, card: WeatherCard) -> Dict[str, Any]:
        """Template context for the current selector and request state.

        Args:
            card: Controller whose state is rendered

        Returns:
            Template context dictionary
        """
        state = card.state
        selector = card.selector
        map_cfg = card.settings.map
        result = state.result if isinstance(state, Success) else None

        return {
            "use_map": selector.mode is InputMode.MAP,
            "city": selector.city_name,
            "lat": selector.lat,
            "lon": selector.lon,
            "marker": selector.marker,
            "loading": isinstance(state, Loading),
            "error": state.message if isinstance(state, Error) else "",
            "weather": result,
            "wind": (
                format_wind(result.current.wind_kph, result.current.wind_dir)
                if result
                else ""
            ),
            "map": {
                "tile_url": map_cfg.tile_url,
                "center": [map_cfg.center_lat, map_cfg.center_lon],
                "zoom": map_cfg.zoom,
                "icon_url": map_cfg.markers.icon_url,
                "icon_retina_url": map_cfg.markers.icon_retina_url,
                "shadow_url": map_cfg.markers.shadow_url,
            },
        }

    def render(self, card: WeatherCard) -> str:
        """Render the full HTML page for ``card``."""
        return self.templates.render_page(**self.build_context(card))


def render_result_lines(result: WeatherResult) -> list[str]:
    """Plain-text card body for a successful lookup."""
    cur = result.current
    return [
        result.location.display_name,
        f"Local time: {result.location.localtime}",
        f"Temperature: {format_temperature(cur.temp_c)}"
        f" (feels like {format_temperature(cur.feelslike_c)})",
        f"Condition: {cur.condition.text}",
        f"Humidity: {format_percentage(cur.humidity)}",
        f"Wind: {format_wind(cur.wind_kph, cur.wind_dir)}",
        f"UV index: {cur.uv:g}",
        f"Pressure: {format_pressure(cur.pressure_mb)}",
    ]


def render_text(state: RequestState) -> str:
    """Render a request state for the terminal."""
    if isinstance(state, Success):
        return "\n".join(render_result_lines(state.result))
    if isinstance(state, Error):
        return state.message
    if isinstance(state, Loading):
        return "Loading..."
    return ""
