from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence

from ..errors import ExternalLookupFailed, NoBuildingsSelected
from ..geo.distance import haversine_m
from ..maps.client import MapServiceClient
from ..maps.models import Building, Candidate, Coordinates
from .config import DEFAULT_SELECTION_CONFIG, SelectionConfig
from .filters import filter_candidates

logger = logging.getLogger(__name__)

RESTAURANT_TYPE = "restaurant"

# Building category -> hint appended to the building name for text search.
BUILDING_QUERY_HINTS: dict[str, str] = {
    "shopping_mall": "restaurant",
    "department_store": "restaurant floor",
    "train_station": "station restaurant",
}

BUILDING_TYPE_LABELS: list[tuple[str, str]] = [
    ("shopping_mall", "Shopping mall"),
    ("department_store", "Department store"),
    ("train_station", "Station"),
]

Branch = Callable[[], Awaitable[list[Candidate]]]


def building_label(types: Sequence[str]) -> str:
    for place_type, label in BUILDING_TYPE_LABELS:
        if place_type in types:
            return label
    return "Facility"


def is_inside_building(
    candidate: Candidate,
    building: Building,
    match_radius_m: float = DEFAULT_SELECTION_CONFIG.building_match_radius_m,
) -> bool:
    """
    A result belongs to a building when its address mentions the building
    by name, or when it sits within ``match_radius_m`` of the building.
    """
    name = building.name.lower()
    for text in (candidate.address, candidate.vicinity):
        if text and name in text.lower():
            return True

    if candidate.location is None:
        return False
    distance = haversine_m(
        building.location.lat,
        building.location.lng,
        candidate.location.lat,
        candidate.location.lng,
    )
    return distance <= match_radius_m


def dedupe_by_id(candidates: Sequence[Candidate]) -> list[Candidate]:
    """Drop repeated ids, keeping the first occurrence."""
    seen: set[str] = set()
    unique: list[Candidate] = []
    for c in candidates:
        if c.id in seen:
            continue
        seen.add(c.id)
        unique.append(c)
    return unique


async def _run_branches(
    branches: Sequence[tuple[str, Branch]],
    max_concurrency: int,
) -> tuple[list[list[Candidate]], int]:
    """
    Run provider queries with at most ``max_concurrency`` in flight.

    Each branch yields its own list, in branch order; a failing branch
    yields an empty list. Returns the lists and the number of failures.
    """
    semaphore = asyncio.Semaphore(max_concurrency)

    async def run(label: str, branch: Branch) -> list[Candidate] | None:
        async with semaphore:
            try:
                return await branch()
            except Exception:
                logger.warning("Search branch %s failed, skipping it", label, exc_info=True)
                return None

    outcomes = await asyncio.gather(*(run(label, branch) for label, branch in branches))
    failures = sum(1 for o in outcomes if o is None)
    return [o or [] for o in outcomes], failures


def _building_branches(
    client: MapServiceClient,
    building: Building,
    open_only: bool,
    config: SelectionConfig,
) -> list[tuple[str, Branch]]:
    radius = config.building_search_radius_m
    match_radius = config.building_match_radius_m

    def inside(results: list[Candidate]) -> list[Candidate]:
        return [c for c in results if is_inside_building(c, building, match_radius)]

    async def nearby() -> list[Candidate]:
        results = await client.nearby_search(building.location, radius, RESTAURANT_TYPE, open_now=open_only)
        return inside(results)

    def text(hint: str) -> Branch:
        async def search() -> list[Candidate]:
            results = await client.text_search(
                f"{building.name} {hint}", building.location, radius, RESTAURANT_TYPE
            )
            return inside(results)

        return search

    branches: list[tuple[str, Branch]] = [(f"{building.name}/nearby", nearby)]
    for category, hint in BUILDING_QUERY_HINTS.items():
        branches.append((f"{building.name}/{category}", text(hint)))
    return branches


async def find_candidates_in_buildings(
    client: MapServiceClient,
    buildings: Sequence[Building],
    min_rating: float,
    open_only: bool,
    config: SelectionConfig = DEFAULT_SELECTION_CONFIG,
) -> list[Candidate]:
    """
    Restaurants inside any of ``buildings`` that pass the rating and
    open-now filters, deduplicated by id (first seen wins).

    Individual query failures contribute nothing; if every query fails,
    ``ExternalLookupFailed`` is raised since no result can be produced.
    """
    if not buildings:
        raise NoBuildingsSelected()

    branches: list[tuple[str, Branch]] = []
    for building in buildings:
        branches.extend(_building_branches(client, building, open_only, config))

    partials, failures = await _run_branches(branches, config.max_concurrency)
    if failures == len(branches):
        raise ExternalLookupFailed("building_search", "ALL_FAILED", "Searching the selected buildings failed")

    merged = dedupe_by_id([c for partial in partials for c in partial])
    logger.debug(
        "Building search: %d buildings, %d branches (%d failed), %d unique results",
        len(buildings),
        len(branches),
        failures,
        len(merged),
    )
    return filter_candidates(merged, min_rating, open_only)


def _to_building(candidate: Candidate) -> Building | None:
    if candidate.location is None:
        return None
    return Building(
        id=candidate.id,
        name=candidate.name,
        location=candidate.location,
        vicinity=candidate.vicinity or candidate.address or "",
        types=candidate.types,
        label=building_label(candidate.types),
    )


async def search_nearby_buildings(
    client: MapServiceClient,
    origin: Coordinates,
    radius_m: float,
    config: SelectionConfig = DEFAULT_SELECTION_CONFIG,
) -> list[Building]:
    """Anchor buildings (malls, department stores, stations) around ``origin``."""

    def search(place_type: str) -> Branch:
        async def run() -> list[Candidate]:
            return await client.nearby_search(origin, radius_m, place_type)

        return run

    branches = [(place_type, search(place_type)) for place_type, _ in BUILDING_TYPE_LABELS]
    partials, failures = await _run_branches(branches, config.max_concurrency)
    if failures == len(branches):
        raise ExternalLookupFailed("building_search", "ALL_FAILED", "Searching nearby buildings failed")

    buildings: list[Building] = []
    for c in dedupe_by_id([c for partial in partials for c in partial]):
        building = _to_building(c)
        if building is not None:
            buildings.append(building)
    return buildings
