"""Weather card CLI application.

This module provides the command-line interface for the weather card:
one-shot lookups, the local browser server and configuration helpers.
"""

from __future__ import annotations

import logging
import sys
import webbrowser
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Final, Optional

import typer
import uvicorn
import yaml
from pydantic import ValidationError

from weathercard.controller import WeatherCard
from weathercard.display.render import CardRenderer, render_text
from weathercard.server import create_app
from weathercard.settings import UserSettings
from weathercard.state import Success

# ── CLI setup ────────────────────────────────────────────────────────────────
app = typer.Typer(help="Weather card CLI", add_completion=False)
config_app = typer.Typer(help="Config helpers")
app.add_typer(config_app, name="config")

logger: Final = logging.getLogger(__name__)  # Will be "weathercard.cli"

# Options shared between commands
CONFIG_OPTION = typer.Option(None, "--config", "-c", exists=True, dir_okay=False)
DEBUG_OPTION = typer.Option(False, "--debug", help="Enable debug logging")
CITY_OPTION = typer.Option("", "--city", help="City name to look up")
LAT_OPTION = typer.Option(None, "--lat", help="Latitude (takes precedence over --city)")
LON_OPTION = typer.Option(None, "--lon", help="Longitude (takes precedence over --city)")
HTML_OPTION = typer.Option(None, "--html", dir_okay=False, help="Also write the card page here")
HOST_OPTION = typer.Option(None, "--host", help="Bind address (default: from config)")
PORT_OPTION = typer.Option(None, "--port", help="Port (default: from config)")
OPEN_OPTION = typer.Option(False, "--open", help="Open the page in a web browser")
DST_ARGUMENT = typer.Argument(..., help="Output config.yaml")


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )


def load_settings(config: Optional[Path]) -> UserSettings:
    try:
        return UserSettings.resolve(config)
    except (FileNotFoundError, RuntimeError) as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc


@app.command()
def lookup(
    city: str = CITY_OPTION,
    lat: Optional[float] = LAT_OPTION,
    lon: Optional[float] = LON_OPTION,
    html: Optional[Path] = HTML_OPTION,
    config: Optional[Path] = CONFIG_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Look up current weather once and print the card."""
    configure_logging(debug)
    settings = load_settings(config)
    card = WeatherCard(settings)

    card.selector.set_city(city)
    card.selector.set_coordinates(lat, lon)
    state = card.fetch_weather()

    if html is not None:
        html.write_text(CardRenderer().render(card), encoding="utf-8")

    if not isinstance(state, Success):
        typer.secho(render_text(state), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    typer.echo(render_text(state))


@app.command()
def serve(
    host: Optional[str] = HOST_OPTION,
    port: Optional[int] = PORT_OPTION,
    open_browser: bool = OPEN_OPTION,
    config: Optional[Path] = CONFIG_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Serve the weather card on a local HTTP server.

    Lookups run on a small worker pool so the page can show the loading
    state while they are in flight. Press Ctrl+C to exit.
    """
    configure_logging(debug)
    settings = load_settings(config)
    host = host or settings.server.host
    port = port if port is not None else settings.server.port
    url = f"http://{host}:{port}/"

    with ThreadPoolExecutor(max_workers=4, thread_name_prefix="lookup") as pool:
        card = WeatherCard(settings, executor=pool)
        typer.echo(f"Serving weather card on {url} - press Ctrl+C to quit")

        if open_browser:
            try:
                webbrowser.open_new_tab(url)
            except Exception as exc:
                logger.debug("Could not open browser: %s", exc)

        uvicorn.run(
            create_app(card),
            host=host,
            port=port,
            log_level="debug" if debug else "info",
        )


# ───────────────────────── config sub-commands ───────────────────────────────
@config_app.command("validate")
def validate_config(file: Path):
    """Validate a YAML config file against the schema."""
    try:
        UserSettings.load(file)
        typer.echo("✅ Config valid")
    except (FileNotFoundError, RuntimeError) as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc


@config_app.command("wizard")
def wizard(dst: Path = DST_ARGUMENT):
    """Interactive prompt to create a config file."""
    typer.echo("Interactive config builder - press Enter for defaults.")

    while True:
        data: dict[str, Any] = {
            "api_key": typer.prompt("weatherapi.com API key", hide_input=True),
            "timeout": float(typer.prompt("Request timeout (seconds)", default="10")),
            "server": {
                "host": typer.prompt("Server host", default="127.0.0.1"),
                "port": int(typer.prompt("Server port", default="8000")),
            },
        }
        try:
            cfg = UserSettings(**data)
            break  # valid → exit loop
        except ValidationError as err:
            typer.secho("\nConfig error(s):", fg=typer.colors.RED, err=True)
            for e in err.errors():
                loc = ".".join(str(p) for p in e["loc"])
                typer.secho(f"  • {loc} - {e['msg']}", fg=typer.colors.RED, err=True)
            typer.echo("Please re-enter the values.\n")

    dst.write_text(yaml.safe_dump(cfg.model_dump(), sort_keys=False), encoding="utf-8")
    typer.secho(f"Config written to {dst}", fg=typer.colors.GREEN)


# ───────────────────────── module entrypoint ────────────────────────────────
if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        sys.exit(0)
