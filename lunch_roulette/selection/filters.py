from __future__ import annotations

from collections.abc import Iterable

from ..geo.distance import haversine_m
from ..maps.models import Candidate, Coordinates


def filter_candidates(
    candidates: Iterable[Candidate],
    min_rating: float,
    open_only: bool,
    origin: Coordinates | None = None,
    radius_m: float | None = None,
) -> list[Candidate]:
    """
    Apply the rating, open-now and radius predicates, preserving order.

    Unrated candidates never pass. Under ``open_only`` an unknown open-now
    status counts as closed. The radius check only runs when both
    ``origin`` and ``radius_m`` are given, and drops candidates without
    coordinates.
    """
    check_radius = origin is not None and radius_m is not None
    kept: list[Candidate] = []
    for c in candidates:
        if c.rating is None or c.rating < min_rating:
            continue
        if open_only and c.open_now is not True:
            continue
        if check_radius:
            if c.location is None:
                continue
            if haversine_m(origin.lat, origin.lng, c.location.lat, c.location.lng) > radius_m:
                continue
        kept.append(c)
    return kept


def describe_empty_pool(radius_m: float | None, min_rating: float, open_only: bool) -> str:
    """User-facing text for a pool that filtering emptied."""
    scope = f"within {round(radius_m)}m" if radius_m is not None else "in the selected buildings"
    if open_only:
        return f"No open restaurants rated {min_rating} or higher found {scope}"
    return f"No restaurants rated {min_rating} or higher found {scope}"
