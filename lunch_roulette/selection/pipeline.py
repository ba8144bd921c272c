from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass

from ..analytics.store import record_event
from ..errors import NoBuildingsSelected, NoCandidatesMatched
from ..geo.sampler import sample_point
from ..maps.client import MapServiceClient
from ..maps.models import Candidate, Location
from .buildings import RESTAURANT_TYPE, dedupe_by_id, find_candidates_in_buildings
from .config import DEFAULT_SELECTION_CONFIG, SelectionConfig
from .filters import describe_empty_pool, filter_candidates
from .history import SelectionHistory, record_pick
from .models import PickRequest, SelectionResult
from .selector import select_candidate
from .walking import resolve_walking

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PickOutcome:
    result: SelectionResult
    history: dict[str, int]
    candidate_count: int
    mode: str


async def gather_candidates(
    client: MapServiceClient,
    request: PickRequest,
    origin: Location,
    config: SelectionConfig = DEFAULT_SELECTION_CONFIG,
    rng: random.Random | None = None,
) -> list[Candidate]:
    """Build the filtered, deduplicated pool for one pick. Raises on an empty pool."""
    if request.building_mode:
        if not request.buildings:
            raise NoBuildingsSelected()
        candidates = await find_candidates_in_buildings(
            client, request.buildings, request.min_rating, request.open_only, config
        )
        if not candidates:
            raise NoCandidatesMatched(describe_empty_pool(None, request.min_rating, request.open_only))
        return candidates

    if config.randomize_origin:
        search_origin = sample_point(origin, request.radius_m, rng)
        raw = await client.nearby_search(search_origin, request.radius_m, RESTAURANT_TYPE, open_now=request.open_only)
        # Pull results back inside the circle around the real origin
        candidates = filter_candidates(raw, request.min_rating, request.open_only, origin, request.radius_m)
    else:
        raw = await client.nearby_search(origin, request.radius_m, RESTAURANT_TYPE, open_now=request.open_only)
        candidates = filter_candidates(raw, request.min_rating, request.open_only)

    candidates = dedupe_by_id(candidates)
    if not candidates:
        raise NoCandidatesMatched(describe_empty_pool(request.radius_m, request.min_rating, request.open_only))
    return candidates


async def pick_restaurant(
    client: MapServiceClient,
    request: PickRequest,
    origin: Location,
    history: SelectionHistory,
    config: SelectionConfig = DEFAULT_SELECTION_CONFIG,
    rng: random.Random | None = None,
) -> PickOutcome:
    """
    Pick one restaurant and return it with the updated session history.

    ``history`` is never mutated; the caller replaces its copy with
    ``PickOutcome.history`` only once this returns.
    """
    start_time = time.time()
    mode = "buildings" if request.building_mode else "radius"

    try:
        candidates = await gather_candidates(client, request, origin, config, rng)
    except Exception as exc:
        record_event("pick_failed", {"mode": mode, "error": type(exc).__name__})
        raise

    chosen = select_candidate(candidates, history, config.decay_factor, rng)
    result = SelectionResult(**chosen.model_dump())

    if chosen.location is not None:
        try:
            walking = await resolve_walking(client, origin, chosen.location, config)
        except Exception:
            logger.warning("Walking distance unavailable for %s", chosen.id, exc_info=True)
        else:
            result.walking_distance_text = walking.distance_text
            result.walking_duration_text = walking.duration_text
            result.walking_is_approximate = walking.approximate

    elapsed_ms = round((time.time() - start_time) * 1000, 1)
    record_event("pick", {
        "mode": mode,
        "place_id": chosen.id,
        "candidate_count": len(candidates),
        "history_size": len(history),
        "approximate_distance": bool(result.walking_is_approximate),
        "response_time_ms": elapsed_ms,
    })

    return PickOutcome(
        result=result,
        history=record_pick(history, chosen.id, config.history_limit),
        candidate_count=len(candidates),
        mode=mode,
    )
