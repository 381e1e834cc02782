"""Web app exposing the weather card in a browser."""

from __future__ import annotations

import logging
from typing import Any, Dict, Final, Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import HTMLResponse, RedirectResponse

from weathercard.controller import WeatherCard
from weathercard.display.render import CardRenderer
from weathercard.state import Error, Success

logger: Final = logging.getLogger(__name__)


def state_payload(card: WeatherCard) -> Dict[str, Any]:
    """JSON-serialisable snapshot of the card."""
    state = card.state
    return {
        "mode": card.mode.value,
        "state": state.name,
        "seq": state.seq,
        "city": card.selector.city_name,
        "lat": card.selector.lat,
        "lon": card.selector.lon,
        "error": state.message if isinstance(state, Error) else None,
        "result": state.result.summary() if isinstance(state, Success) else None,
    }


def _home() -> RedirectResponse:
    return RedirectResponse(url="/", status_code=303)


def create_app(card: WeatherCard, renderer: Optional[CardRenderer] = None) -> FastAPI:
    """Build the web app around a shared WeatherCard.

    Lookups started by ``/fetch`` and ``/select`` run on the card's
    executor when it has one, so the redirected page can show the
    loading state until the result arrives.
    """
    renderer = renderer or CardRenderer()
    app = FastAPI(
        title="Weather Card",
        description="Current weather by city name or map click",
        version="0.1.0",
    )

    @app.get("/", response_class=HTMLResponse)
    def index() -> HTMLResponse:
        return HTMLResponse(renderer.render(card), headers={"Cache-Control": "no-store"})

    @app.get("/fetch")
    def fetch(
        city: str = Query("", description="City name"),
        lat: Optional[str] = Query(None, description="Typed latitude"),
        lon: Optional[str] = Query(None, description="Typed longitude"),
    ) -> RedirectResponse:
        card.search(city, lat, lon)
        return _home()

    @app.get("/select")
    def select(
        lat: float = Query(..., description="Clicked latitude"),
        lon: float = Query(..., description="Clicked longitude"),
    ) -> RedirectResponse:
        try:
            card.select_on_map(lat, lon)
        except RuntimeError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        return _home()

    @app.get("/toggle")
    def toggle() -> RedirectResponse:
        card.toggle_mode()
        return _home()

    @app.get("/state.json")
    def state() -> Dict[str, Any]:
        return state_payload(card)

    return app
