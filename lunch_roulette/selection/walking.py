from __future__ import annotations

import logging

from ..geo.distance import format_distance, haversine_m
from ..maps.client import MapServiceClient
from ..maps.models import Coordinates, WalkingInfo
from .config import DEFAULT_SELECTION_CONFIG, SelectionConfig

logger = logging.getLogger(__name__)

APPROX_PREFIX = "approx. "


def estimate_walking(
    origin: Coordinates,
    destination: Coordinates,
    config: SelectionConfig = DEFAULT_SELECTION_CONFIG,
) -> WalkingInfo:
    """Straight-line estimate at a fixed walking pace, marked as approximate."""
    distance_m = haversine_m(origin.lat, origin.lng, destination.lat, destination.lng)
    minutes = round(distance_m / config.walking_speed_m_per_min)
    return WalkingInfo(
        distance_text=f"{APPROX_PREFIX}{format_distance(distance_m)}",
        duration_text=f"{APPROX_PREFIX}{minutes} min",
        approximate=True,
    )


async def resolve_walking(
    client: MapServiceClient,
    origin: Coordinates,
    destination: Coordinates,
    config: SelectionConfig = DEFAULT_SELECTION_CONFIG,
) -> WalkingInfo:
    """
    Walking distance / duration from the provider's directions, or the
    haversine estimate when the route lookup fails for any reason.
    """
    try:
        return await client.route(origin, destination)
    except Exception:
        logger.warning("Walking route lookup failed, falling back to straight-line estimate", exc_info=True)
        return estimate_walking(origin, destination, config)
