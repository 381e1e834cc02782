"""Exception classes for weather lookups.

Every failure the card can show derives from WeatherAPIError, so the
controller can catch a single type at its fetch boundary and turn it
into a user-facing message.
"""

from __future__ import annotations

from typing import Any, Dict, Final, Optional

FETCH_FAILED_MESSAGE: Final = "Failed to fetch weather data."
GENERIC_FAILURE_MESSAGE: Final = "Something went wrong."
MISSING_LOCATION_MESSAGE: Final = (
    "Please enter a city name or select a location on the map."
)


class WeatherAPIError(Exception):
    """Error during a weather lookup.

    Carries a numeric code (HTTP status, or 0 when no response was
    received), a human-readable message and the raw error payload when
    the API returned one.
    """

    def __init__(
        self, code: int, message: str, response: Optional[Dict[str, Any]] = None
    ) -> None:
        """Initialize the exception.

        Args:
            code: HTTP status code or 0 for local failures
            message: Human-readable error message
            response: Optional raw API response for debugging
        """
        super().__init__(f"[{code}] {message}")
        self.code: int = code
        self.message: str = message
        self.response: Optional[Dict[str, Any]] = response

    @property
    def user_message(self) -> str:
        """Message shown on the card for this error."""
        return self.message or GENERIC_FAILURE_MESSAGE

    @property
    def is_client_error(self) -> bool:
        """Check if this is a client-side error (4xx)."""
        return 400 <= self.code < 500

    @property
    def is_server_error(self) -> bool:
        """Check if this is a server-side error (5xx)."""
        return self.code >= 500

    @classmethod
    def from_response(
        cls, response: Dict[str, Any], status_code: int = 0
    ) -> WeatherAPIError:
        """Create an error from a non-2xx API response.

        weatherapi.com reports failures as
        ``{"error": {"code": 1006, "message": "No matching location found."}}``;
        a flat ``{"message": ...}`` body is accepted as well.

        Args:
            response: Decoded error body (may be empty)
            status_code: HTTP status code

        Returns:
            Appropriate HTTPStatusError subclass
        """
        detail = response.get("error") if isinstance(response.get("error"), dict) else response
        message = str(detail.get("message", "")) if detail else ""

        if 400 <= status_code < 500:
            if status_code in (401, 403):
                return AuthenticationError(
                    status_code, message or "Authentication failed", response
                )
            if status_code == 404:
                return NotFoundError(status_code, message or "Resource not found", response)
            if status_code == 429:
                return RateLimitError(status_code, message or "Rate limit exceeded", response)
            return ClientError(status_code, message or "Client error", response)
        if status_code >= 500:
            return ServerError(status_code, message or "Server error", response)

        return HTTPStatusError(status_code, message or "Unknown error", response)


class LocationValidationError(WeatherAPIError):
    """Raised when no usable location is available; no request is made."""

    def __init__(self, message: str = MISSING_LOCATION_MESSAGE) -> None:
        super().__init__(0, message)


class NetworkError(WeatherAPIError):
    """Raised when a network issue prevents API communication."""

    def __init__(
        self, message: str, original_error: Optional[Exception] = None
    ) -> None:
        """Initialize with network error details.

        Args:
            message: Description of the network error
            original_error: The original exception that was caught
        """
        super().__init__(0, message)
        self.original_error = original_error

    @property
    def user_message(self) -> str:
        return FETCH_FAILED_MESSAGE


class HTTPStatusError(NetworkError):
    """Raised when the API answers with a non-success status."""

    def __init__(
        self, code: int, message: str, response: Optional[Dict[str, Any]] = None
    ) -> None:
        WeatherAPIError.__init__(self, code, message, response)
        self.original_error = None


class AuthenticationError(HTTPStatusError):
    """Raised when API authentication fails (invalid or disabled key)."""

    pass


class NotFoundError(HTTPStatusError):
    """Raised when a requested resource doesn't exist."""

    pass


class RateLimitError(HTTPStatusError):
    """Raised when rate limits are exceeded."""

    pass


class ClientError(HTTPStatusError):
    """Raised for general 4xx client errors."""

    pass


class ServerError(HTTPStatusError):
    """Raised for 5xx server errors."""

    pass


class ParseError(WeatherAPIError):
    """Raised when the API response cannot be decoded or validated."""

    def __init__(
        self, message: str, original_error: Optional[Exception] = None
    ) -> None:
        """Initialize with parsing error details.

        Args:
            message: Description of the parsing error
            original_error: The original exception that was caught
        """
        super().__init__(0, message)
        self.original_error = original_error

    @property
    def user_message(self) -> str:
        return GENERIC_FAILURE_MESSAGE
