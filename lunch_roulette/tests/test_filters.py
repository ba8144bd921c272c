from __future__ import annotations

from lunch_roulette.maps.models import Coordinates
from lunch_roulette.selection.filters import describe_empty_pool, filter_candidates


def test_min_rating_keeps_order(candidate):
    pool = [candidate("a", rating=3.0), candidate("b", rating=4.0), candidate("c", rating=5.0)]
    result = filter_candidates(pool, min_rating=4.0, open_only=False)
    assert [c.id for c in result] == ["b", "c"]


def test_unrated_candidates_are_dropped(candidate):
    pool = [candidate("a", rating=None), candidate("b", rating=4.2)]
    result = filter_candidates(pool, min_rating=0.0, open_only=False)
    assert [c.id for c in result] == ["b"]


def test_open_only_treats_unknown_as_closed(candidate):
    pool = [
        candidate("open", open_now=True),
        candidate("closed", open_now=False),
        candidate("unknown"),
    ]
    result = filter_candidates(pool, min_rating=0.0, open_only=True)
    assert [c.id for c in result] == ["open"]


def test_open_status_ignored_without_open_only(candidate):
    pool = [candidate("closed", open_now=False), candidate("unknown")]
    assert len(filter_candidates(pool, min_rating=0.0, open_only=False)) == 2


def test_radius_check_against_true_origin(candidate):
    origin = Coordinates(lat=35.681, lng=139.767)
    near = candidate("near", lat=35.682, lng=139.767)  # ~110m north
    far = candidate("far", lat=35.700, lng=139.767)  # ~2.1km north
    nowhere = candidate("nowhere", lat=None, lng=None)
    result = filter_candidates([near, far, nowhere], 0.0, False, origin=origin, radius_m=500)
    assert [c.id for c in result] == ["near"]


def test_radius_check_needs_both_origin_and_radius(candidate):
    far = candidate("far", lat=36.5, lng=139.767)
    assert filter_candidates([far], 0.0, False, origin=Coordinates(lat=35.0, lng=139.0)) == [far]


def test_empty_input_gives_empty_output():
    assert filter_candidates([], 4.0, True) == []


def test_describe_empty_pool_messages():
    assert describe_empty_pool(1000, 4.0, False) == "No restaurants rated 4.0 or higher found within 1000m"
    assert "open" in describe_empty_pool(500, 3.5, True)
    assert "selected buildings" in describe_empty_pool(None, 3.5, False)
