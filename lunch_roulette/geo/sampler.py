from __future__ import annotations

import random
from math import cos, pi, sin, sqrt

from ..maps.models import Coordinates, Location

METERS_PER_DEGREE_LAT = 111320.0
_MIN_LAT_SCALE = 1e-12


def sample_point(
    center: Coordinates,
    radius_m: float,
    rng: random.Random | None = None,
) -> Location:
    """
    Return a point drawn uniformly over the disk of ``radius_m`` around
    ``center``.

    Querying the provider from a randomized origin spreads out which venues
    its nearest-first ranking surfaces. ``sqrt`` on the radial draw keeps
    the density uniform by area instead of piling up near the center.
    Latitude is clamped to the poles and longitude wraps across the
    antimeridian.
    """
    rng = rng or random
    r = radius_m * sqrt(rng.random())
    theta = 2 * pi * rng.random()

    dlat = (r * cos(theta)) / METERS_PER_DEGREE_LAT
    # Floor keeps the longitude offset finite at the poles
    lat_scale = max(cos(center.lat * pi / 180), _MIN_LAT_SCALE)
    dlng = (r * sin(theta)) / (METERS_PER_DEGREE_LAT * lat_scale)

    lat = min(max(center.lat + dlat, -90.0), 90.0)
    lng = ((center.lng + dlng + 180.0) % 360.0) - 180.0
    return Location(lat=lat, lng=lng)
