"""Geospatial helper functions."""

from __future__ import annotations

import math
from typing import Iterable

from ..models.domain import Coordinate

EARTH_RADIUS_MILES = 3959.0


def haversine_miles(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_MILES * c


def distance(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance in miles between two (lat, lng) pairs."""

    return haversine_miles(a[0], a[1], b[0], b[1])


def mean_center(points: Iterable[Coordinate]) -> Coordinate:
    """Arithmetic mean of (lat, lng) pairs; raises ValueError when empty."""

    lats: list[float] = []
    lngs: list[float] = []
    for lat, lng in points:
        lats.append(lat)
        lngs.append(lng)
    if not lats:
        raise ValueError("Cannot compute the center of zero points")
    return sum(lats) / len(lats), sum(lngs) / len(lngs)
