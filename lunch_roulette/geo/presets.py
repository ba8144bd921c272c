from __future__ import annotations

import logging

from ..maps.models import Location

logger = logging.getLogger(__name__)

DEBUG_LOCATIONS: dict[str, Location] = {
    "tokyo_station": Location(lat=35.6809799, lng=139.7621861),
    "kyobashi_station": Location(lat=35.6764499, lng=139.7685946),
    "shibuya_station": Location(lat=35.6580339, lng=139.6990609),
    "osaka_umeda_station": Location(lat=34.7039445, lng=135.497523),
}


def get_debug_location(name: str | None) -> Location | None:
    """Resolve a preset name (usually from ``DEBUG_LOCATION``) to an origin."""
    if not name:
        return None

    location = DEBUG_LOCATIONS.get(name)
    if location is None:
        logger.warning(
            "Unknown debug location %r, available: %s",
            name,
            ", ".join(DEBUG_LOCATIONS),
        )
        return None
    return location
