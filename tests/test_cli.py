from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest
import yaml
from typer.testing import CliRunner

from conftest import make_response
from weathercard.cli import app

runner = CliRunner()

CONFIG_YAML = """\
api_key: "${TEST_CLI_WEATHERAPI_KEY}"
timeout: 4
"""


@pytest.fixture
def config_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setenv("TEST_CLI_WEATHERAPI_KEY", "cli-test-key-123456")
    path = tmp_path / "config.yaml"
    path.write_text(CONFIG_YAML)
    return path


def test_lookup_city(config_file: Path, current_payload: dict[str, Any]) -> None:
    with patch("weathercard.weather.api.requests.get") as mock_get:
        mock_get.return_value = make_response(200, current_payload)
        result = runner.invoke(app, ["lookup", "--city", "Paris", "--config", str(config_file)])

    assert result.exit_code == 0, result.output
    assert "Paris, France" in result.output
    assert "Temperature: 17°C" in result.output
    params = mock_get.call_args.kwargs["params"]
    assert params == {"key": "cli-test-key-123456", "q": "Paris", "aqi": "no"}
    assert mock_get.call_args.kwargs["timeout"] == 4


def test_lookup_coordinates_and_html(
    config_file: Path, current_payload: dict[str, Any], tmp_path: Path
) -> None:
    out = tmp_path / "card.html"
    with patch("weathercard.weather.api.requests.get") as mock_get:
        mock_get.return_value = make_response(200, current_payload)
        result = runner.invoke(
            app,
            [
                "lookup",
                "--lat=51.5074",
                "--lon=-0.1278",
                "--html",
                str(out),
                "--config",
                str(config_file),
            ],
        )

    assert result.exit_code == 0, result.output
    assert mock_get.call_args.kwargs["params"]["q"] == "51.5074,-0.1278"
    assert "Paris, France" in out.read_text(encoding="utf-8")


def test_lookup_without_location_fails(config_file: Path) -> None:
    with patch("weathercard.weather.api.requests.get") as mock_get:
        result = runner.invoke(app, ["lookup", "--config", str(config_file)])

    assert result.exit_code == 1
    assert "Please enter a city name" in result.output
    mock_get.assert_not_called()


def test_lookup_http_error(config_file: Path) -> None:
    with patch("weathercard.weather.api.requests.get") as mock_get:
        mock_get.return_value = make_response(400, {"error": {"code": 1006, "message": "No matching location found."}})
        result = runner.invoke(app, ["lookup", "--city", "Atlantis", "--config", str(config_file)])

    assert result.exit_code == 1
    assert "Failed to fetch weather data." in result.output


def test_config_validate(config_file: Path, tmp_path: Path) -> None:
    result = runner.invoke(app, ["config", "validate", str(config_file)])
    assert result.exit_code == 0
    assert "Config valid" in result.output

    bad = tmp_path / "bad.yaml"
    bad.write_text("api_key: short\n")
    result = runner.invoke(app, ["config", "validate", str(bad)])
    assert result.exit_code == 1


def test_config_wizard(tmp_path: Path) -> None:
    dst = tmp_path / "out.yaml"
    answers = "short\n10\n127.0.0.1\n8000\nlong-enough-key-123\n5\n0.0.0.0\n8080\n"
    result = runner.invoke(app, ["config", "wizard", str(dst)], input=answers)

    assert result.exit_code == 0, result.output
    data = yaml.safe_load(dst.read_text())
    assert data["api_key"] == "long-enough-key-123"
    assert data["timeout"] == 5.0
    assert data["server"] == {"host": "0.0.0.0", "port": 8080}
