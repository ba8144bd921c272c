from __future__ import annotations

from collections.abc import Mapping

# Candidate id -> times picked this session. Callers treat it as a value.
# Insertion order runs from least to most recently picked.
SelectionHistory = Mapping[str, int]


def times_picked(history: SelectionHistory, place_id: str) -> int:
    return int(history.get(place_id, 0))


def trim_history(history: SelectionHistory, limit: int) -> dict[str, int]:
    """Keep the ``limit`` most recently picked ids."""
    items = list(history.items())
    return dict(items[-limit:]) if len(items) > limit else dict(items)


def record_pick(history: SelectionHistory, place_id: str, limit: int | None = None) -> dict[str, int]:
    """
    Return a new history with ``place_id`` counted once more and moved to
    the most-recent end. With ``limit``, the oldest ids beyond it are
    dropped so the session cookie stays small.
    """
    updated = {k: v for k, v in history.items() if k != place_id}
    updated[place_id] = times_picked(history, place_id) + 1
    if limit is not None:
        return trim_history(updated, limit)
    return updated


def coerce_history(raw: object) -> dict[str, int]:
    """Read a history out of untrusted session storage, dropping bad entries."""
    if not isinstance(raw, Mapping):
        return {}
    history: dict[str, int] = {}
    for key, value in raw.items():
        if isinstance(key, str) and isinstance(value, int) and not isinstance(value, bool) and value > 0:
            history[key] = value
    return history
