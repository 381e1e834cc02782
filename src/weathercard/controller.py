"""Core controller for the weather card."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Executor, Future
from typing import Final

from weathercard.selector import InputMode, LocationSelector
from weathercard.settings import UserSettings
from weathercard.state import RequestState, RequestStore
from weathercard.weather.api import WeatherAPI
from weathercard.weather.errors import WeatherAPIError
from weathercard.weather.query import CoordinateQuery, LocationQuery

logger: Final = logging.getLogger(__name__)


class WeatherCard:
    """Main controller for a single weather card.

    Ties together the location selector, the API client and the request
    state:
    - builds a query from the selector and validates it before any I/O
    - runs the lookup, either inline or on an injected executor
    - converts every WeatherAPIError into the message shown on the card
    - starts a lookup automatically whenever the map is clicked

    Input changes, the sequence number and the query for one lookup are
    taken together under a lock, so concurrent callers never read each
    other's input. Overlapping lookups are allowed; the request store
    keeps only the outcome of the most recent one.
    """

    def __init__(
        self,
        settings: UserSettings,
        weather_api: WeatherAPI | None = None,
        selector: LocationSelector | None = None,
        store: RequestStore | None = None,
        executor: Executor | None = None,
    ) -> None:
        """Initialize the controller.

        Args:
            settings: User settings (API key, map and server sections)
            weather_api: Optional custom weather API client
            selector: Optional pre-built location selector
            store: Optional request state store
            executor: Run lookups in the background when given
        """
        self.settings = settings
        self.weather_api = weather_api or WeatherAPI(settings)
        self.selector = selector or LocationSelector()
        self.store = store or RequestStore()
        self.executor = executor
        self.last_future: Future[RequestState] | None = None
        self._lock = threading.Lock()
        self._selected: list[tuple[int, CoordinateQuery]] | None = None

        self.selector.on_location_selected(self._on_location_selected)

    # ---- state shortcuts ----
    @property
    def state(self) -> RequestState:
        return self.store.state

    @property
    def mode(self) -> InputMode:
        return self.selector.mode

    # ---- user actions ----
    def toggle_mode(self) -> InputMode:
        """Switch input mode, clearing input, result and error."""
        with self._lock:
            mode = self.selector.toggle_mode()
            self.store.reset()
            return mode

    def search(
        self,
        city: str = "",
        lat_text: str | None = None,
        lon_text: str | None = None,
    ) -> RequestState:
        """Manual lookup from typed values, as submitted by the form."""
        with self._lock:
            self.selector.set_city(city)
            seq = self.store.begin()
            try:
                self.selector.set_coordinate_text(lat_text, lon_text)
                query = self.selector.build_query()
            except WeatherAPIError as err:
                self._record_failure(seq, err)
                return self.state
        return self._dispatch(seq, query)

    def select_on_map(self, lat: float, lon: float) -> RequestState:
        """Map click: place the marker and fetch for that point."""
        with self._lock:
            self._selected = []
            try:
                self.selector.click_map(lat, lon)
            finally:
                selected, self._selected = self._selected, None
        if not selected:
            return self.state
        return self._dispatch(*selected[-1])

    def fetch_weather(self) -> RequestState:
        """Look up weather for whatever the selector currently holds."""
        with self._lock:
            seq = self.store.begin()
            try:
                query = self.selector.build_query()
            except WeatherAPIError as err:
                self._record_failure(seq, err)
                return self.state
        return self._dispatch(seq, query)

    # ---- internals ----
    def _on_location_selected(self, query: CoordinateQuery) -> None:
        seq = self.store.begin()
        if self._selected is None:
            # Click made on the selector directly
            self._dispatch(seq, query)
        else:
            # Inside select_on_map: dispatched once the lock is released
            self._selected.append((seq, query))

    def _dispatch(self, seq: int, query: LocationQuery) -> RequestState:
        if self.executor is None:
            return self._run(seq, query)

        self.last_future = self.executor.submit(self._run, seq, query)
        return self.state

    def _run(self, seq: int, query: LocationQuery) -> RequestState:
        try:
            result = self.weather_api.fetch_current(query)
        except WeatherAPIError as err:
            self._record_failure(seq, err)
        else:
            self.store.succeed(seq, result)
        return self.state

    def _record_failure(self, seq: int, err: WeatherAPIError) -> None:
        logger.info("Lookup #%d failed: %s", seq, err)
        self.store.fail(seq, err.user_message)
