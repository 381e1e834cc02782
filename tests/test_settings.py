from pathlib import Path

import pytest
from pydantic import ValidationError

from weathercard.settings import UserSettings


def test_defaults() -> None:
    cfg = UserSettings(api_key="0123456789abcdef")
    assert cfg.api_url == "https://api.weatherapi.com/v1/current.json"
    assert cfg.timeout == 10.0
    assert cfg.map.tile_url == "https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png"
    assert (cfg.map.center_lat, cfg.map.center_lon, cfg.map.zoom) == (20.0, 0.0, 2)
    assert cfg.server.port == 8000


def test_short_api_key_rejected() -> None:
    with pytest.raises(ValidationError):
        UserSettings(api_key="short")


def test_load_interpolates_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TEST_WEATHERAPI_KEY", "abcdefghijklmnop")
    path = tmp_path / "config.yaml"
    path.write_text(
        'api_key: "${TEST_WEATHERAPI_KEY}"\n'
        "timeout: 3\n"
        "map:\n"
        "  zoom: 5\n"
        "server:\n"
        "  port: 9000\n"
    )
    cfg = UserSettings.load(path)
    assert cfg.api_key == "abcdefghijklmnop"
    assert cfg.timeout == 3
    assert cfg.map.zoom == 5
    assert cfg.server.port == 9000


def test_load_invalid_raises_runtime_error(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("api_key: x\ntimeout: -1\n")
    with pytest.raises(RuntimeError, match="Invalid configuration"):
        UserSettings.load(path)


def test_load_env_path_missing(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("WEATHERCARD_CONFIG", str(tmp_path / "nope.yaml"))
    with pytest.raises(FileNotFoundError):
        UserSettings.load()


def test_resolve_falls_back_to_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("WEATHERCARD_CONFIG", raising=False)
    monkeypatch.setattr(UserSettings, "DEFAULT_CONFIG_PATHS", [tmp_path / "missing.yaml"])
    monkeypatch.setenv("WEATHERAPI_KEY", "env-key-0123456789")
    assert UserSettings.resolve().api_key == "env-key-0123456789"

    monkeypatch.delenv("WEATHERAPI_KEY")
    with pytest.raises(RuntimeError):
        UserSettings.resolve()
