from __future__ import annotations

from pydantic import BaseModel, Field


class Coordinates(BaseModel):
    lat: float = Field(..., ge=-90.0, le=90.0)
    lng: float = Field(..., ge=-180.0, le=180.0)


class Location(Coordinates):
    address: str | None = None


class Candidate(BaseModel):
    id: str
    name: str
    rating: float | None = None
    location: Coordinates | None = None
    open_now: bool | None = None
    vicinity: str | None = None
    address: str | None = None
    weekday_hours: list[str] = Field(default_factory=list)
    types: list[str] = Field(default_factory=list)


class Building(BaseModel):
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    location: Coordinates
    vicinity: str = ""
    types: list[str] = Field(default_factory=list)
    label: str | None = None


class WalkingInfo(BaseModel):
    distance_text: str
    duration_text: str
    approximate: bool = False
