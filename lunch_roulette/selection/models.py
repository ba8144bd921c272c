from __future__ import annotations

from pydantic import BaseModel, Field

from ..maps.models import Building, Candidate, Location


class PickRequest(BaseModel):
    origin: Location | None = Field(
        default=None, description="Search center; falls back to the debug preset when omitted"
    )
    radius_m: float = Field(default=1000.0, gt=0.0, le=50000.0)
    min_rating: float = Field(default=3.5, ge=0.0, le=5.0)
    open_only: bool = False
    building_mode: bool = Field(
        default=False, description="Search inside the given buildings instead of the radius"
    )
    buildings: list[Building] = Field(default_factory=list)


class SelectionResult(Candidate):
    walking_distance_text: str | None = None
    walking_duration_text: str | None = None
    walking_is_approximate: bool | None = None


class PickResponse(BaseModel):
    restaurant: SelectionResult
    maps_url: str
    times_picked: int
    candidate_count: int


class AddressResponse(BaseModel):
    address: str
