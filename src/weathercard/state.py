"""Request state for the weather card.

Each lookup takes a sequence number from the store. Only the outcome of
the most recently issued lookup is applied; outcomes that arrive for an
older sequence number are dropped.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Final, Union

from weathercard.weather.models import WeatherResult

logger: Final = logging.getLogger(__name__)


@dataclass(frozen=True)
class Idle:
    seq: int = 0

    name = "idle"


@dataclass(frozen=True)
class Loading:
    seq: int

    name = "loading"


@dataclass(frozen=True)
class Success:
    seq: int
    result: WeatherResult

    name = "success"


@dataclass(frozen=True)
class Error:
    seq: int
    message: str

    name = "error"


RequestState = Union[Idle, Loading, Success, Error]


class RequestStore:
    """Thread-safe holder of the currently displayed request state."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._seq = 0
        self._state: RequestState = Idle()

    @property
    def state(self) -> RequestState:
        with self._lock:
            return self._state

    @property
    def latest_seq(self) -> int:
        with self._lock:
            return self._seq

    @property
    def result(self) -> WeatherResult | None:
        state = self.state
        return state.result if isinstance(state, Success) else None

    @property
    def error(self) -> str | None:
        state = self.state
        return state.message if isinstance(state, Error) else None

    @property
    def loading(self) -> bool:
        return isinstance(self.state, Loading)

    def begin(self) -> int:
        """Start a new request and return its sequence number."""
        with self._lock:
            self._seq += 1
            self._state = Loading(self._seq)
            return self._seq

    def succeed(self, seq: int, result: WeatherResult) -> bool:
        """Apply a successful outcome; returns False if it is stale."""
        return self._apply(Success(seq, result))

    def fail(self, seq: int, message: str) -> bool:
        """Apply a failed outcome; returns False if it is stale."""
        return self._apply(Error(seq, message))

    def reset(self) -> None:
        """Return to Idle and invalidate every request still in flight."""
        with self._lock:
            self._seq += 1
            self._state = Idle(self._seq)

    def _apply(self, state: Success | Error) -> bool:
        with self._lock:
            if state.seq != self._seq:
                logger.debug(
                    "Discarding stale %s for request #%d (latest is #%d)",
                    state.name,
                    state.seq,
                    self._seq,
                )
                return False
            self._state = state
            return True
