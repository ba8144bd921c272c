from __future__ import annotations

import os
import random
from collections.abc import AsyncIterator

import httpx
from fastapi import Depends, FastAPI, HTTPException, Query, Request
from starlette.middleware.sessions import SessionMiddleware

from .analytics.aggregator import compute_stats
from .analytics.store import get_events
from .errors import ExternalLookupFailed, NoBuildingsSelected, NoCandidatesMatched, RouletteError
from .geo.presets import get_debug_location
from .maps.client import GoogleMapsClient, MapServiceClient, maps_url
from .maps.config import DEFAULT_MAPS_CONFIG
from .maps.models import Building, Coordinates, Location
from .selection.buildings import search_nearby_buildings
from .selection.config import DEFAULT_SELECTION_CONFIG, SelectionConfig
from .selection.history import coerce_history, times_picked
from .selection.models import AddressResponse, PickRequest, PickResponse
from .selection.pipeline import pick_restaurant

app = FastAPI(title="Lunch Roulette API", version="1.0.0")
app.add_middleware(
    SessionMiddleware,
    secret_key=os.environ.get("SESSION_SECRET", "lunch-roulette-secret-change-in-production"),
)

_DEBUG_LOCATION = os.environ.get("DEBUG_LOCATION")

_ERROR_STATUS: dict[type[RouletteError], int] = {
    NoBuildingsSelected: 400,
    NoCandidatesMatched: 404,
    ExternalLookupFailed: 502,
}


# ── Dependencies ─────────────────────────────────────────────────────────


async def get_maps_client() -> AsyncIterator[MapServiceClient]:
    """One provider client per request, closed with its HTTP pool."""
    async with httpx.AsyncClient() as http:
        yield GoogleMapsClient(http, DEFAULT_MAPS_CONFIG)


def get_selection_config() -> SelectionConfig:
    return DEFAULT_SELECTION_CONFIG


def get_rng() -> random.Random | None:
    return None


def _http_error(exc: RouletteError) -> HTTPException:
    for error_type, status_code in _ERROR_STATUS.items():
        if isinstance(exc, error_type):
            return HTTPException(status_code=status_code, detail=exc.message)
    return HTTPException(status_code=500, detail=exc.message)


def _resolve_origin(body: PickRequest) -> Location:
    if body.origin is not None:
        return body.origin
    debug_origin = get_debug_location(_DEBUG_LOCATION)
    if debug_origin is not None:
        return debug_origin
    raise HTTPException(status_code=400, detail="Get your current location first")


# ── Endpoints ────────────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/pick", response_model=PickResponse)
async def pick(
    body: PickRequest,
    request: Request,
    client: MapServiceClient = Depends(get_maps_client),
    config: SelectionConfig = Depends(get_selection_config),
    rng: random.Random | None = Depends(get_rng),
) -> PickResponse:
    origin = _resolve_origin(body)
    history = coerce_history(request.session.get("history"))

    try:
        outcome = await pick_restaurant(client, body, origin, history, config, rng)
    except RouletteError as exc:
        raise _http_error(exc) from exc

    # Only a completed pick touches the session
    request.session["history"] = outcome.history

    return PickResponse(
        restaurant=outcome.result,
        maps_url=maps_url(outcome.result),
        times_picked=times_picked(outcome.history, outcome.result.id),
        candidate_count=outcome.candidate_count,
    )


@app.get("/buildings", response_model=list[Building])
async def buildings(
    lat: float = Query(..., ge=-90.0, le=90.0),
    lng: float = Query(..., ge=-180.0, le=180.0),
    radius_m: float = Query(default=1000.0, gt=0.0, le=50000.0),
    client: MapServiceClient = Depends(get_maps_client),
    config: SelectionConfig = Depends(get_selection_config),
) -> list[Building]:
    try:
        return await search_nearby_buildings(client, Coordinates(lat=lat, lng=lng), radius_m, config)
    except RouletteError as exc:
        raise _http_error(exc) from exc


@app.get("/address", response_model=AddressResponse)
async def address(
    lat: float = Query(..., ge=-90.0, le=90.0),
    lng: float = Query(..., ge=-180.0, le=180.0),
    client: MapServiceClient = Depends(get_maps_client),
) -> AddressResponse:
    try:
        label = await client.geocode(Coordinates(lat=lat, lng=lng))
    except RouletteError as exc:
        raise _http_error(exc) from exc
    return AddressResponse(address=label)


@app.get("/history")
def get_history(request: Request) -> dict[str, int]:
    return coerce_history(request.session.get("history"))


@app.delete("/history")
def reset_history(request: Request) -> dict[str, str]:
    request.session.pop("history", None)
    return {"status": "cleared"}


@app.get("/location/debug", response_model=Location)
def debug_location() -> Location:
    location = get_debug_location(_DEBUG_LOCATION)
    if location is None:
        raise HTTPException(status_code=404, detail="No debug location configured")
    return location


@app.get("/stats")
def stats() -> dict:
    return compute_stats(get_events())
