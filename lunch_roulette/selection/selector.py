from __future__ import annotations

import logging
import random
from collections.abc import Sequence

from ..maps.models import Candidate
from .config import DEFAULT_SELECTION_CONFIG
from .history import SelectionHistory, times_picked

logger = logging.getLogger(__name__)


def _check_decay_factor(decay_factor: float) -> None:
    if not 0.0 < decay_factor < 1.0:
        raise ValueError(f"decay_factor must be in (0, 1), got {decay_factor}")


def candidate_weight(place_id: str, history: SelectionHistory, decay_factor: float) -> float:
    """Draw weight: 1 for an unpicked candidate, times ``decay_factor`` per prior pick."""
    return decay_factor ** times_picked(history, place_id)


def selection_probabilities(
    candidates: Sequence[Candidate],
    history: SelectionHistory,
    decay_factor: float = DEFAULT_SELECTION_CONFIG.decay_factor,
) -> dict[str, float]:
    """Probability of each candidate id being drawn by ``select_candidate``."""
    _check_decay_factor(decay_factor)
    weights = {c.id: candidate_weight(c.id, history, decay_factor) for c in candidates}
    total = sum(weights.values())
    return {cid: w / total for cid, w in weights.items()} if total > 0 else {}


def select_candidate(
    candidates: Sequence[Candidate],
    history: SelectionHistory,
    decay_factor: float = DEFAULT_SELECTION_CONFIG.decay_factor,
    rng: random.Random | None = None,
) -> Candidate:
    """
    Draw one candidate, favouring ones picked less often this session.

    1. Shuffle a copy of the pool so provider ranking order cannot act as
       a tie-break.
    2. Weight each candidate by ``decay_factor ** times_picked``.
    3. Draw ``x`` in ``[0, total)`` and walk the shuffled pool subtracting
       weights; the first candidate that brings ``x`` to ``<= 0`` wins.
    4. If rounding leaves the walk exhausted, pick uniformly.

    Raises ``ValueError`` for an empty pool or a decay factor outside (0, 1).
    """
    if not candidates:
        raise ValueError("cannot select from an empty candidate pool")
    _check_decay_factor(decay_factor)

    rng = rng or random
    pool = list(candidates)
    rng.shuffle(pool)

    weights = [candidate_weight(c.id, history, decay_factor) for c in pool]
    remaining = rng.random() * sum(weights)

    for candidate, weight in zip(pool, weights):
        remaining -= weight
        if remaining <= 0:
            return candidate

    logger.debug("Weighted walk exhausted with remainder %r, picking uniformly", remaining)
    return rng.choice(pool)
