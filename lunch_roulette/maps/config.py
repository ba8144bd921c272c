from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class MapsConfig:
    api_key: str = os.getenv("GOOGLE_MAPS_API_KEY", "")
    base_url: str = os.getenv("GOOGLE_MAPS_BASE_URL", "https://maps.googleapis.com/maps/api")
    language: str = os.getenv("GOOGLE_MAPS_LANGUAGE", "ja")
    region: str = os.getenv("GOOGLE_MAPS_REGION", "jp")
    timeout: float = 10.0

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)


DEFAULT_MAPS_CONFIG = MapsConfig()
