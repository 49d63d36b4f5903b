"""
Purpose: Nearest-vertex lookup over a route polyline.
What it does:
For an arbitrary point, finds the route vertex with the smallest Haversine
distance and returns its index and that distance.

Linear scan per query. Routes are a few hundred vertices, so O(n) is fine;
a grid or k-d tree is the next step only if routes grow much larger.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

from .geometry import GeoPoint, distance_km


class DegenerateRoute(ValueError):
    """Raised when route geometry has fewer than two points."""
    pass


@dataclass(frozen=True)
class ClosestVertex:
    index: int
    distance_km: float


def closest_vertex(points: Sequence[GeoPoint], point: GeoPoint) -> ClosestVertex:
    """
    Return the first route vertex achieving the minimum distance to `point`.

    Ties keep the lowest index (strict `<` while scanning).
    """
    if len(points) < 2:
        raise DegenerateRoute(f"Route needs at least 2 points, got {len(points)}")

    best_index = 0
    best_distance = distance_km(points[0], point)
    for index in range(1, len(points)):
        d = distance_km(points[index], point)
        if d < best_distance:
            best_index = index
            best_distance = d

    return ClosestVertex(index=best_index, distance_km=best_distance)


class RouteIndex:
    """
    Read-only index over one route's vertices.

    Built once per matching request and queried for every candidate.
    """

    def __init__(self, points: Sequence[GeoPoint]):
        if len(points) < 2:
            raise DegenerateRoute(f"Route needs at least 2 points, got {len(points)}")
        self._points: Tuple[GeoPoint, ...] = tuple(points)

    def __len__(self) -> int:
        return len(self._points)

    @property
    def points(self) -> Tuple[GeoPoint, ...]:
        return self._points

    def closest_vertex(self, point: GeoPoint) -> ClosestVertex:
        return closest_vertex(self._points, point)
