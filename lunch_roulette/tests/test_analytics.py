from __future__ import annotations

from lunch_roulette.analytics.aggregator import compute_stats
from lunch_roulette.analytics.store import clear_events, get_events, record_event


def test_stats_empty():
    body = compute_stats([])
    assert body["total_picks"] == 0
    assert body["avg_response_time_ms"] == 0.0
    assert body["approximate_distance_rate"] == 0.0
    assert body["top_places"] == []


def test_stats_aggregates_picks():
    record_event("pick", {"mode": "radius", "place_id": "a", "approximate_distance": True, "response_time_ms": 10.0})
    record_event("pick", {"mode": "radius", "place_id": "a", "approximate_distance": False, "response_time_ms": 30.0})
    record_event("pick", {"mode": "buildings", "place_id": "b", "approximate_distance": False, "response_time_ms": 20.0})
    record_event("pick_failed", {"mode": "radius", "error": "ExternalLookupFailed"})

    body = compute_stats(get_events())
    assert body["total_picks"] == 3
    assert body["total_failures"] == 1
    assert body["avg_response_time_ms"] == 20.0
    assert body["mode_usage"] == {"radius": 2, "buildings": 1}
    assert body["approximate_distance_rate"] == 33.3
    assert body["top_places"][0] == {"place_id": "a", "count": 2}
    assert body["failures_by_error"] == {"ExternalLookupFailed": 1}


def test_clear_events():
    record_event("pick", {"mode": "radius"})
    clear_events()
    assert get_events() == []
