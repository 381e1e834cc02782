"""User-configurable settings loaded from config.yaml."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import ClassVar

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

# Load environment variables from .env file(s)
load_dotenv()


def _interpolate_env(content: str) -> str:
    return re.sub(r"\$\{(\w+)\}", lambda m: os.getenv(m.group(1), ""), content)


class MarkerIcons(BaseModel):
    """Leaflet marker icon assets."""

    icon_url: str = "https://unpkg.com/leaflet@1.9.4/dist/images/marker-icon.png"
    icon_retina_url: str = "https://unpkg.com/leaflet@1.9.4/dist/images/marker-icon-2x.png"
    shadow_url: str = "https://unpkg.com/leaflet@1.9.4/dist/images/marker-shadow.png"


class MapSettings(BaseModel):
    """Interactive map used for selecting a location by click."""

    tile_url: str = Field(
        "https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png",
        description="Tile server URL template",
    )
    center_lat: float = Field(20.0, ge=-90, le=90, description="Initial map centre latitude")
    center_lon: float = Field(0.0, ge=-180, le=180, description="Initial map centre longitude")
    zoom: int = Field(2, ge=0, le=19, description="Initial zoom level")
    markers: MarkerIcons = Field(default_factory=MarkerIcons)


class ServerSettings(BaseModel):
    """Local HTTP server serving the widget page."""

    host: str = "127.0.0.1"
    port: int = Field(8000, ge=0, le=65535)


class UserSettings(BaseModel):
    """User settings for the weather card.

    Values come from config.yaml; ``${VAR}`` placeholders are filled from
    the environment so the API key can live in a .env file.
    """

    # Default search paths for configuration
    DEFAULT_CONFIG_PATHS: ClassVar[list[Path]] = [
        Path("config.yaml"),
        Path("~/.config/weathercard/config.yaml").expanduser(),
        Path("/etc/weathercard/config.yaml"),
    ]
    API_KEY_ENV: ClassVar[str] = "WEATHERAPI_KEY"

    # API settings
    api_key: str = Field(..., min_length=10, description="weatherapi.com API key")
    api_url: str = Field(
        "https://api.weatherapi.com/v1/current.json",
        description="Current conditions endpoint",
    )
    timeout: float = Field(10.0, gt=0, description="Request timeout (seconds)")

    # Presentation
    map: MapSettings = Field(default_factory=MapSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)

    @classmethod
    def from_env(cls) -> UserSettings:
        """Build settings from the ``WEATHERAPI_KEY`` environment variable.

        Raises:
            RuntimeError: If the variable is missing or invalid
        """
        try:
            return cls(api_key=os.environ.get(cls.API_KEY_ENV, ""))
        except ValidationError as err:
            raise RuntimeError(
                f"Set {cls.API_KEY_ENV} or provide a config file:\n{err}"
            ) from err

    @classmethod
    def load(cls, path: Path | None = None) -> UserSettings:
        """Load configuration from a YAML file.

        Args:
            path: Path to config file (optional, searches default locations if None)

        Returns:
            Validated UserSettings object

        Raises:
            FileNotFoundError: If no config file is found
            RuntimeError: If the config file cannot be parsed or is invalid
        """
        # Try to find config file
        if path is None:
            # Check environment variable first
            env_path = os.environ.get("WEATHERCARD_CONFIG")
            if env_path:
                path = Path(env_path)
                if not path.exists():
                    raise FileNotFoundError(
                        f"Config file from WEATHERCARD_CONFIG not found: {path}"
                    )
            else:
                # Try default paths
                for default_path in cls.DEFAULT_CONFIG_PATHS:
                    if default_path.exists():
                        path = default_path
                        break
                else:
                    raise FileNotFoundError(
                        "No configuration file found. Create config.yaml or set WEATHERCARD_CONFIG."
                    )

        try:
            raw = _interpolate_env(path.read_text())
            data = yaml.safe_load(raw)
        except Exception as exc:  # pragma: no cover
            raise RuntimeError(f"Unable to read config YAML: {exc}") from exc

        try:
            return cls.model_validate(data)
        except ValidationError as err:
            raise RuntimeError(f"Invalid configuration:\n{err}") from err

    @classmethod
    def resolve(cls, path: Path | None = None) -> UserSettings:
        """Load from a config file, falling back to the environment.

        An explicit ``path`` must exist; without one, the default search
        locations are tried before ``WEATHERAPI_KEY``.
        """
        if path is not None:
            return cls.load(path)
        try:
            return cls.load()
        except FileNotFoundError:
            return cls.from_env()
