from __future__ import annotations

import pytest

from lunch_roulette.analytics.store import clear_events
from lunch_roulette.errors import ExternalLookupFailed
from lunch_roulette.maps.models import Candidate, Coordinates, WalkingInfo


class FakeMapsClient:
    """In-memory stand-in for the mapping provider.

    ``nearby`` maps a place type to results; ``text`` maps a query string to
    results. Any key listed in ``fail`` raises ``ExternalLookupFailed``.
    """

    def __init__(
        self,
        nearby: dict[str, list[Candidate]] | None = None,
        text: dict[str, list[Candidate]] | None = None,
        walking: WalkingInfo | None = None,
        address: str = "Marunouchi 1-chome, Chiyoda",
        fail: set[str] | None = None,
    ) -> None:
        self.nearby = nearby or {}
        self.text = text or {}
        self.walking = walking
        self.address = address
        self.fail = fail or set()
        self.calls: list[tuple] = []

    async def nearby_search(self, origin, radius_m, place_type, open_now=False):
        self.calls.append(("nearby_search", origin, radius_m, place_type, open_now))
        if place_type in self.fail:
            raise ExternalLookupFailed("nearby_search", "OVER_QUERY_LIMIT")
        return list(self.nearby.get(place_type, []))

    async def text_search(self, query, origin, radius_m, place_type):
        self.calls.append(("text_search", query, origin, radius_m, place_type))
        if query in self.fail:
            raise ExternalLookupFailed("text_search", "OVER_QUERY_LIMIT")
        return list(self.text.get(query, []))

    async def route(self, origin, destination):
        self.calls.append(("route", origin, destination))
        if self.walking is None:
            raise ExternalLookupFailed("route", "ZERO_RESULTS")
        return self.walking

    async def geocode(self, location):
        self.calls.append(("geocode", location))
        if "geocode" in self.fail:
            raise ExternalLookupFailed("geocode", "REQUEST_DENIED")
        return self.address


def make_candidate(
    place_id: str,
    rating: float | None = 4.0,
    lat: float | None = 35.681,
    lng: float | None = 139.767,
    **fields,
) -> Candidate:
    location = Coordinates(lat=lat, lng=lng) if lat is not None and lng is not None else None
    return Candidate(id=place_id, name=fields.pop("name", f"Place {place_id}"), rating=rating, location=location, **fields)


@pytest.fixture
def fake_client_cls():
    return FakeMapsClient


@pytest.fixture
def candidate():
    return make_candidate


@pytest.fixture(autouse=True)
def _clean_events():
    clear_events()
    yield
    clear_events()
