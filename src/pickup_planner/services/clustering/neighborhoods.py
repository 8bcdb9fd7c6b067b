"""Neighborhood registry and coordinate matching."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Sequence

from ...models.domain import Coordinate, Neighborhood
from ..geospatial import distance

OTHER_AREAS = "Other Areas"

# Order matters: equidistant matches resolve to the earlier entry.
NEIGHBORHOOD_REGISTRY: tuple[Neighborhood, ...] = (
    # Philadelphia city
    Neighborhood("Center City Philadelphia", 39.9526, -75.1652, 2),
    Neighborhood("South Philadelphia", 39.9259, -75.1580, 3),
    Neighborhood("Fishtown/Northern Liberties", 39.9742, -75.1352, 2.5),
    Neighborhood("Kensington/Port Richmond", 39.9923, -75.1237, 2.5),
    Neighborhood("West Philadelphia", 39.9612, -75.2058, 3.5),
    Neighborhood("North Philadelphia", 40.0094, -75.1394, 3),
    Neighborhood("Manayunk/Roxborough", 40.0248, -75.2238, 2.5),
    Neighborhood("Northeast Philadelphia", 40.0567, -75.0821, 4),
    Neighborhood("Northwest Philadelphia", 40.0543, -75.1785, 3),
    # Pennsylvania suburbs
    Neighborhood("Main Line (Ardmore/Bryn Mawr)", 40.0084, -75.2932, 3),
    Neighborhood("Delaware County PA", 39.8784, -75.3282, 5),
    Neighborhood("Montgomery County PA", 40.1379, -75.3901, 5),
    Neighborhood("Chester County PA", 39.9896, -75.7346, 6),
    Neighborhood("Bucks County PA", 40.3434, -75.1327, 6),
    Neighborhood("King of Prussia/Wayne", 40.0890, -75.3857, 2.5),
    # New Jersey
    Neighborhood("Camden County NJ", 39.8743, -75.0379, 4),
    Neighborhood("Cherry Hill NJ", 39.9348, -75.0307, 2.5),
    Neighborhood("Gloucester County NJ", 39.7051, -75.1585, 4),
    Neighborhood("Burlington County NJ", 39.8729, -74.6776, 5),
    Neighborhood("Moorestown/Marlton NJ", 39.9687, -74.9188, 3),
    # Delaware
    Neighborhood("Wilmington DE", 39.7391, -75.5398, 3),
    Neighborhood("New Castle County DE", 39.5928, -75.6058, 4),
)


def match_neighborhood(
    coordinates: Coordinate,
    registry: Sequence[Neighborhood] = NEIGHBORHOOD_REGISTRY,
) -> str:
    """Return the closest registry region containing the point, or ``Other Areas``."""

    best_match = OTHER_AREAS
    shortest = float("inf")
    for neighborhood in registry:
        miles = distance(coordinates, neighborhood.center)
        if miles <= neighborhood.radius_miles and miles < shortest:
            shortest = miles
            best_match = neighborhood.name
    return best_match


def load_registry(path: Path) -> tuple[Neighborhood, ...]:
    """Load an ordered registry from a JSON list of ``{name, lat, lng, radius}``."""

    if not path.exists():
        raise FileNotFoundError(f"Neighborhood file not found: {path}")

    with path.open("r", encoding="utf-8") as handle:
        entries = json.load(handle)
    if not isinstance(entries, list):
        raise ValueError(f"Neighborhood file '{path}' must contain a JSON list.")

    neighborhoods: list[Neighborhood] = []
    for index, entry in enumerate(entries):
        try:
            neighborhood = Neighborhood(
                name=str(entry["name"]).strip(),
                latitude=float(entry["lat"]),
                longitude=float(entry["lng"]),
                radius_miles=float(entry["radius"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"Invalid neighborhood entry #{index} in '{path}': {entry!r}") from exc
        if not neighborhood.name or neighborhood.name == OTHER_AREAS:
            raise ValueError(f"Invalid neighborhood name at entry #{index} in '{path}'.")
        if neighborhood.radius_miles < 0:
            raise ValueError(f"Negative radius for neighborhood '{neighborhood.name}'.")
        neighborhoods.append(neighborhood)

    logging.info(f"Loaded {len(neighborhoods)} neighborhoods from {path}")
    return tuple(neighborhoods)
