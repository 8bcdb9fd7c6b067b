"""Nearest-neighbor visiting order within a cluster."""

from __future__ import annotations

from typing import Sequence

from ...models.domain import AddressCluster, Coordinate, CustomerAddress
from ..geospatial import distance


def _closest_index(candidates: Sequence[CustomerAddress], origin: Coordinate) -> int:
    # Strict comparison: the earliest candidate wins ties.
    best_index = 0
    best_distance = distance(candidates[0].coordinates, origin)
    for index in range(1, len(candidates)):
        candidate_distance = distance(candidates[index].coordinates, origin)
        if candidate_distance < best_distance:
            best_index = index
            best_distance = candidate_distance
    return best_index


def optimize_route(cluster: AddressCluster) -> list[CustomerAddress]:
    """Order cluster stops greedily, starting from the stop nearest the centroid.

    O(n^2) heuristic; not optimal, but deterministic for a given input order.
    """

    if len(cluster.addresses) <= 1:
        return list(cluster.addresses)

    remaining = list(cluster.addresses)
    current = remaining.pop(_closest_index(remaining, cluster.centroid))
    ordered = [current]

    while remaining:
        current = remaining.pop(_closest_index(remaining, current.coordinates))
        ordered.append(current)
    return ordered


def route_distance_miles(stops: Sequence[CustomerAddress]) -> float:
    return sum(
        distance(previous.coordinates, stop.coordinates)
        for previous, stop in zip(stops, stops[1:])
    )
