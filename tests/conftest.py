import copy
import json
from pathlib import Path
from typing import Any
from unittest.mock import Mock

import pytest

from weathercard.settings import UserSettings
from weathercard.weather.models import WeatherResult

DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture
def current_payload() -> dict[str, Any]:
    raw = json.loads((DATA_DIR / "current_paris.json").read_text())
    return copy.deepcopy(raw)


@pytest.fixture
def weather_result(current_payload: dict[str, Any]) -> WeatherResult:
    return WeatherResult.model_validate(current_payload)


@pytest.fixture
def settings() -> UserSettings:
    return UserSettings(api_key="test-api-key-123", timeout=5)


def make_response(status_code: int = 200, payload: Any = None) -> Mock:
    """Fake ``requests.Response`` with the given status and JSON body."""
    resp = Mock()
    resp.status_code = status_code
    if payload is None:
        resp.json.side_effect = ValueError("No JSON object could be decoded")
        resp.text = ""
    else:
        resp.json.return_value = payload
        resp.text = json.dumps(payload)
    return resp
