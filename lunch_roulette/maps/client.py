from __future__ import annotations

import logging
import re
from typing import Any, Protocol
from urllib.parse import quote

import httpx

from ..errors import ExternalLookupFailed
from .config import DEFAULT_MAPS_CONFIG, MapsConfig
from .models import Candidate, Coordinates, WalkingInfo

logger = logging.getLogger(__name__)

_SEARCH_EMPTY_STATUSES = {"ZERO_RESULTS"}


class MapServiceClient(Protocol):
    """The provider capabilities the selection engine relies on."""

    async def nearby_search(
        self,
        origin: Coordinates,
        radius_m: float | None,
        place_type: str,
        open_now: bool = False,
    ) -> list[Candidate]: ...

    async def text_search(
        self,
        query: str,
        origin: Coordinates,
        radius_m: float,
        place_type: str,
    ) -> list[Candidate]: ...

    async def route(self, origin: Coordinates, destination: Coordinates) -> WalkingInfo: ...

    async def geocode(self, location: Coordinates) -> str: ...


def _parse_place(item: dict[str, Any]) -> Candidate | None:
    place_id = item.get("place_id")
    if not place_id:
        return None

    location = None
    geometry_location = (item.get("geometry") or {}).get("location") or {}
    if "lat" in geometry_location and "lng" in geometry_location:
        location = Coordinates(lat=float(geometry_location["lat"]), lng=float(geometry_location["lng"]))

    hours = item.get("opening_hours") or {}
    rating = item.get("rating")
    return Candidate(
        id=str(place_id),
        name=item.get("name") or "",
        rating=float(rating) if rating is not None else None,
        location=location,
        open_now=hours.get("open_now"),
        vicinity=item.get("vicinity"),
        address=item.get("formatted_address"),
        weekday_hours=list(hours.get("weekday_text") or []),
        types=list(item.get("types") or []),
    )


def clean_address(address: str) -> str:
    """Strip the postal code and country fragments from a formatted address."""
    address = re.sub(r"〒\d{3}-\d{4}\s*", "", address)
    address = re.sub(r"^日本、", "", address)
    address = re.sub(r"Japan,?\s*", "", address)
    return address.strip()


def maps_url(candidate: Candidate) -> str:
    """Google Maps deep link for a candidate."""
    if candidate.location is not None:
        query = f"{candidate.location.lat},{candidate.location.lng}"
    else:
        query = quote(candidate.name, safe="")
    return (
        "https://www.google.com/maps/search/?api=1"
        f"&query={query}&query_place_id={candidate.id}"
    )


class GoogleMapsClient:
    """
    Google Maps web service client.

    The caller owns the ``httpx.AsyncClient`` and its lifetime; every
    failure leaves this class as ``ExternalLookupFailed``.
    """

    def __init__(self, http: httpx.AsyncClient, config: MapsConfig = DEFAULT_MAPS_CONFIG) -> None:
        self.http = http
        self.config = config

    async def _get(self, operation: str, path: str, params: dict[str, Any]) -> dict[str, Any]:
        if not self.config.enabled:
            raise ExternalLookupFailed(operation, "NO_API_KEY", "Google Maps API key is not configured")

        query = {**params, "key": self.config.api_key, "language": self.config.language}
        try:
            resp = await self.http.get(
                f"{self.config.base_url.rstrip('/')}/{path}",
                params=query,
                timeout=self.config.timeout,
            )
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPError as exc:
            raise ExternalLookupFailed(operation, "HTTP_ERROR", f"{operation} lookup failed: {exc}") from exc
        except ValueError as exc:
            raise ExternalLookupFailed(operation, "INVALID_RESPONSE") from exc

        return data

    async def _search(self, operation: str, path: str, params: dict[str, Any]) -> list[Candidate]:
        data = await self._get(operation, path, params)
        status = data.get("status", "UNKNOWN_ERROR")
        if status in _SEARCH_EMPTY_STATUSES:
            return []
        if status != "OK":
            raise ExternalLookupFailed(operation, status)

        results: list[Candidate] = []
        for item in data.get("results", []):
            candidate = _parse_place(item)
            if candidate is not None:
                results.append(candidate)

        logger.debug("%s: %s got %d results", operation, params.get("type"), len(results))
        return results

    async def nearby_search(
        self,
        origin: Coordinates,
        radius_m: float | None,
        place_type: str,
        open_now: bool = False,
    ) -> list[Candidate]:
        params: dict[str, Any] = {"location": f"{origin.lat},{origin.lng}", "type": place_type}
        if radius_m is None:
            params["rankby"] = "distance"
        else:
            params["radius"] = int(round(radius_m))
        if open_now:
            params["opennow"] = "true"
        return await self._search("nearby_search", "place/nearbysearch/json", params)

    async def text_search(
        self,
        query: str,
        origin: Coordinates,
        radius_m: float,
        place_type: str,
    ) -> list[Candidate]:
        params = {
            "query": query,
            "location": f"{origin.lat},{origin.lng}",
            "radius": int(round(radius_m)),
            "type": place_type,
            "region": self.config.region,
        }
        return await self._search("text_search", "place/textsearch/json", params)

    async def route(self, origin: Coordinates, destination: Coordinates) -> WalkingInfo:
        data = await self._get(
            "route",
            "directions/json",
            {
                "origin": f"{origin.lat},{origin.lng}",
                "destination": f"{destination.lat},{destination.lng}",
                "mode": "walking",
                "units": "metric",
                "region": self.config.region,
            },
        )
        status = data.get("status", "UNKNOWN_ERROR")
        if status != "OK":
            raise ExternalLookupFailed("route", status)

        routes = data.get("routes") or []
        legs = (routes[0].get("legs") or []) if routes else []
        if not legs:
            raise ExternalLookupFailed("route", "NO_ROUTE", "No walking route found")

        leg = legs[0]
        return WalkingInfo(
            distance_text=(leg.get("distance") or {}).get("text") or "unknown",
            duration_text=(leg.get("duration") or {}).get("text") or "unknown",
        )

    async def geocode(self, location: Coordinates) -> str:
        data = await self._get(
            "geocode",
            "geocode/json",
            {"latlng": f"{location.lat},{location.lng}", "region": self.config.region},
        )
        status = data.get("status", "UNKNOWN_ERROR")
        results = data.get("results") or []
        if status != "OK" or not results:
            raise ExternalLookupFailed("geocode", status)

        address = clean_address(results[0].get("formatted_address") or "")
        if not address:
            raise ExternalLookupFailed("geocode", "EMPTY_ADDRESS")
        return address
