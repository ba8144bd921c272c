from __future__ import annotations

from collections import Counter
from typing import Any


def compute_stats(events: list[dict[str, Any]]) -> dict[str, Any]:
    picks = [e for e in events if e["type"] == "pick"]
    failures = [e for e in events if e["type"] == "pick_failed"]
    total = len(picks)

    times = [p["response_time_ms"] for p in picks if "response_time_ms" in p]
    avg_time = round(sum(times) / len(times), 1) if times else 0.0

    mode_counter: Counter[str] = Counter(p.get("mode", "unknown") for p in picks)

    approximate = sum(1 for p in picks if p.get("approximate_distance"))

    # Most-picked places
    place_counter: Counter[str] = Counter(p["place_id"] for p in picks if p.get("place_id"))
    top_places = [{"place_id": pid, "count": c} for pid, c in place_counter.most_common(10)]

    error_counter: Counter[str] = Counter(f.get("error", "unknown") for f in failures)

    return {
        "total_picks": total,
        "total_failures": len(failures),
        "avg_response_time_ms": avg_time,
        "mode_usage": dict(mode_counter),
        "approximate_distance_rate": round(approximate / total * 100, 1) if total else 0.0,
        "top_places": top_places,
        "failures_by_error": dict(error_counter),
    }
