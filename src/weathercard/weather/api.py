"""Weather API client for weatherapi.com."""

from __future__ import annotations

import logging
from typing import Any, Final

import requests
from pydantic import ValidationError

from weathercard.settings import UserSettings

from .errors import NetworkError, ParseError, WeatherAPIError
from .models import WeatherResult
from .query import LocationQuery, build_query_string

logger = logging.getLogger(__name__)

# Human-readable explanations for common HTTP errors
HTTP_ERROR_MAP: Final = {
    400: "Bad request - location not found or parameter missing",
    401: "Invalid or missing API key",
    403: "API key disabled or quota exceeded",
    404: "Endpoint not found",
    429: "Rate limit exceeded",
    500: "weatherapi.com internal error",
    502: "Bad gateway at weatherapi.com",
    503: "Service unavailable (maintenance)",
    504: "Gateway timeout",
}


class WeatherAPI:
    """weatherapi.com client for current conditions.

    Issues exactly one GET per lookup and turns the outcome into either a
    validated WeatherResult or a WeatherAPIError subclass. The API key and
    endpoint come from the settings passed in at construction time.
    """

    def __init__(self, config: UserSettings, timeout: float | None = None) -> None:
        """Initialize the weather API client.

        Args:
            config: Settings with API key and endpoint
            timeout: Timeout for API requests in seconds (default: from settings)
        """
        self.config = config
        self.timeout = timeout if timeout is not None else config.timeout

    def build_params(self, query: LocationQuery) -> dict[str, str]:
        """Query parameters for a lookup."""
        return {
            "key": self.config.api_key,
            "q": build_query_string(query),
            "aqi": "no",
        }

    def fetch_current(self, query: LocationQuery) -> WeatherResult:
        """Retrieve current conditions for a location.

        Args:
            query: City name or coordinate pair

        Returns:
            Validated WeatherResult

        Raises:
            NetworkError: When the request cannot be completed
            HTTPStatusError: When the API answers with a non-2xx status
            ParseError: When the body is not JSON or does not match the schema
        """
        params = self.build_params(query)
        logger.debug("Requesting current weather for q=%s", params["q"])

        try:
            resp = requests.get(self.config.api_url, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.warning("Weather API network error: %s", exc)
            raise NetworkError(f"Network error: {exc}", exc) from exc

        if not 200 <= resp.status_code < 300:
            body = self._error_body(resp) or {
                "message": HTTP_ERROR_MAP.get(resp.status_code, "")
            }
            err = WeatherAPIError.from_response(body, resp.status_code)
            logger.error("Weather API error: %s - %s", resp.status_code, err.message)
            raise err

        try:
            raw: Any = resp.json()
        except ValueError as exc:
            logger.error("Weather API returned invalid JSON: %s", exc)
            raise ParseError("Response body is not valid JSON", exc) from exc

        try:
            result = WeatherResult.model_validate(raw)
        except ValidationError as exc:
            logger.error("Weather API response did not match schema: %s", exc)
            raise ParseError("Unexpected response structure", exc) from exc

        logger.info(
            "Fetched weather for %s: %s°C, %s",
            result.location.display_name,
            result.current.temp_c,
            result.condition_text,
        )
        return result

    @staticmethod
    def _error_body(resp: requests.Response) -> dict[str, Any]:
        try:
            body = resp.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}
