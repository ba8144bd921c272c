from __future__ import annotations

import asyncio
import re

import pytest

from lunch_roulette.geo.distance import haversine_m
from lunch_roulette.maps.models import Coordinates, WalkingInfo
from lunch_roulette.selection.config import SelectionConfig
from lunch_roulette.selection.walking import estimate_walking, resolve_walking

ORIGIN = Coordinates(lat=35.681, lng=139.767)
DESTINATION = Coordinates(lat=35.658, lng=139.701)


def test_provider_route_is_returned_verbatim(fake_client_cls):
    client = fake_client_cls(walking=WalkingInfo(distance_text="6.9 km", duration_text="1 hour 28 mins"))
    info = asyncio.run(resolve_walking(client, ORIGIN, DESTINATION))
    assert info.distance_text == "6.9 km"
    assert info.duration_text == "1 hour 28 mins"
    assert info.approximate is False


def test_falls_back_to_haversine_when_route_fails(fake_client_cls):
    info = asyncio.run(resolve_walking(fake_client_cls(walking=None), ORIGIN, DESTINATION))
    expected_m = haversine_m(ORIGIN.lat, ORIGIN.lng, DESTINATION.lat, DESTINATION.lng)

    assert info.approximate is True
    assert info.distance_text.startswith("approx. ")
    value = float(re.search(r"[\d.]+", info.distance_text).group())
    assert info.distance_text.endswith("km")
    assert value * 1000 == pytest.approx(expected_m, rel=0.05)
    assert info.duration_text == f"approx. {round(expected_m / 80)} min"


def test_fallback_catches_unexpected_errors(fake_client_cls):
    class BrokenClient(fake_client_cls):
        async def route(self, origin, destination):
            raise RuntimeError("connection reset")

    info = asyncio.run(resolve_walking(BrokenClient(), ORIGIN, DESTINATION))
    assert info.approximate is True


def test_short_distances_in_meters():
    near = Coordinates(lat=35.6820, lng=139.767)  # ~111m
    info = estimate_walking(ORIGIN, near)
    assert info.distance_text == "approx. 111m"
    assert info.duration_text == "approx. 1 min"


def test_estimate_uses_configured_pace():
    slow = SelectionConfig(walking_speed_m_per_min=40.0)
    d = haversine_m(ORIGIN.lat, ORIGIN.lng, DESTINATION.lat, DESTINATION.lng)
    assert estimate_walking(ORIGIN, DESTINATION, slow).duration_text == f"approx. {round(d / 40)} min"
