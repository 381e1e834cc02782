import threading
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from weathercard.controller import WeatherCard
from weathercard.selector import InputMode
from weathercard.server import create_app
from weathercard.settings import UserSettings
from weathercard.weather.api import WeatherAPI
from weathercard.weather.models import WeatherResult
from weathercard.weather.query import CityQuery, CoordinateQuery


@pytest.fixture
def mock_api(weather_result: WeatherResult) -> MagicMock:
    api = MagicMock(spec=WeatherAPI)
    api.fetch_current.return_value = weather_result
    return api


@pytest.fixture
def card(settings: UserSettings, mock_api: MagicMock) -> WeatherCard:
    return WeatherCard(settings, weather_api=mock_api)


@pytest.fixture
def client(card: WeatherCard) -> TestClient:
    return TestClient(create_app(card))


def test_index_renders_form(client: TestClient) -> None:
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/html")
    assert "Weather App" in resp.text
    assert 'name="city"' in resp.text
    assert 'http-equiv="refresh"' not in resp.text


def test_fetch_redirects_and_shows_card(client: TestClient, mock_api: MagicMock) -> None:
    resp = client.get("/fetch", params={"city": "Paris", "lat": "", "lon": ""})

    assert resp.status_code == 200
    assert resp.history and resp.history[0].status_code == 303
    assert "Paris, France" in resp.text
    mock_api.fetch_current.assert_called_once_with(CityQuery(city_name="Paris"))


def test_toggle_then_select(client: TestClient, card: WeatherCard, mock_api: MagicMock) -> None:
    client.get("/toggle")
    assert card.mode is InputMode.MAP

    resp = client.get("/select", params={"lat": "51.5074", "lon": "-0.1278"})
    assert resp.status_code == 200
    mock_api.fetch_current.assert_called_once_with(CoordinateQuery(lat=51.5074, lon=-0.1278))

    state = client.get("/state.json").json()
    assert state["mode"] == "map"
    assert state["state"] == "success"
    assert state["result"]["name"] == "Paris"
    assert (state["lat"], state["lon"]) == (51.5074, -0.1278)


def test_select_requires_numbers(client: TestClient, mock_api: MagicMock) -> None:
    client.get("/toggle")
    resp = client.get("/select", params={"lat": "x"})
    assert resp.status_code == 422
    mock_api.fetch_current.assert_not_called()


def test_select_in_manual_mode_conflicts(client: TestClient, mock_api: MagicMock) -> None:
    resp = client.get("/select", params={"lat": "1", "lon": "2"})
    assert resp.status_code == 409
    assert resp.json()["detail"] == "Map clicks are only accepted in map mode"
    mock_api.fetch_current.assert_not_called()


def test_validation_error_in_state(client: TestClient, mock_api: MagicMock) -> None:
    client.get("/fetch", params={"city": ""})
    state = client.get("/state.json").json()
    assert state["state"] == "error"
    assert state["error"] == "Please enter a city name or select a location on the map."
    mock_api.fetch_current.assert_not_called()


def test_unknown_path(client: TestClient) -> None:
    assert client.get("/nope").status_code == 404


def test_page_shows_loading_while_lookup_runs(
    settings: UserSettings, weather_result: WeatherResult
) -> None:
    release = threading.Event()

    def slow_fetch(query):
        release.wait(timeout=5)
        return weather_result

    api = MagicMock(spec=WeatherAPI)
    api.fetch_current.side_effect = slow_fetch

    with ThreadPoolExecutor(max_workers=1) as pool:
        card = WeatherCard(settings, weather_api=api, executor=pool)
        client = TestClient(create_app(card))

        resp = client.get("/fetch", params={"city": "Paris"})
        assert resp.status_code == 200
        assert resp.history[0].status_code == 303
        assert "Loading..." in resp.text
        assert 'http-equiv="refresh"' in resp.text
        assert client.get("/state.json").json()["state"] == "loading"

        release.set()
        card.last_future.result(timeout=5)

        page = client.get("/").text
        assert "Loading..." not in page
        assert "Paris, France" in page
