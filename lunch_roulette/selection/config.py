from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class SelectionConfig:
    # Each prior pick multiplies a candidate's draw weight by this factor.
    decay_factor: float = float(os.getenv("SELECTION_DECAY_FACTOR", "0.5"))
    randomize_origin: bool = os.getenv("SELECTION_RANDOMIZE_ORIGIN", "true").lower() in ("1", "true", "yes", "on")
    building_search_radius_m: float = 50.0
    building_match_radius_m: float = 20.0
    max_concurrency: int = 3
    walking_speed_m_per_min: float = 80.0
    # Distinct ids kept in the session cookie; least recently picked go first.
    history_limit: int = 50

    def __post_init__(self) -> None:
        if not 0.0 < self.decay_factor < 1.0:
            raise ValueError(f"decay_factor must be in (0, 1), got {self.decay_factor}")
        if self.max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        if self.history_limit < 1:
            raise ValueError("history_limit must be at least 1")


DEFAULT_SELECTION_CONFIG = SelectionConfig()
