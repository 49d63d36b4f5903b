"""
Purpose: Geographic value types and the distance primitive.
What it does:
Defines GeoPoint / RoutePolyline and the Haversine great-circle distance
used by every proximity check in the matching engine.

Rule: No HTTP, no matching rules. Pure math and immutable values only.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple

# Earth radius in kilometers (spherical model, not WGS84)
EARTH_RADIUS_KM = 6371.0


@dataclass(frozen=True)
class GeoPoint:
    """
    An immutable (lat, lon) pair in decimal degrees.
    """
    lat: float
    lon: float

    def __post_init__(self) -> None:
        if not -90.0 <= self.lat <= 90.0:
            raise ValueError(f"Latitude must be between -90 and 90 degrees. Got: {self.lat}")
        if not -180.0 <= self.lon <= 180.0:
            raise ValueError(f"Longitude must be between -180 and 180 degrees. Got: {self.lon}")


@dataclass(frozen=True)
class RoutePolyline:
    """
    Route geometry as returned by the routing provider.

    Owned by a single matching request and never mutated after construction.
    """
    points: Tuple[GeoPoint, ...]
    duration_seconds: float
    distance_meters: Optional[float] = None

    def __post_init__(self) -> None:
        if self.duration_seconds < 0:
            raise ValueError("duration_seconds must be >= 0")

    @classmethod
    def new(
        cls,
        points: Iterable[GeoPoint],
        duration_seconds: float,
        distance_meters: Optional[float] = None,
    ) -> RoutePolyline:
        return cls(
            points=tuple(points),
            duration_seconds=float(duration_seconds),
            distance_meters=None if distance_meters is None else float(distance_meters),
        )

    @property
    def duration_minutes(self) -> float:
        return self.duration_seconds / 60.0

    def __len__(self) -> int:
        return len(self.points)


def distance_km(a: GeoPoint, b: GeoPoint) -> float:
    """
    Haversine distance between two points, in kilometers.

    Accurate to the spherical-Earth approximation (~0.5% against an
    ellipsoid), which is fine for kilometer-scale proximity thresholds.
    """
    lat1 = math.radians(a.lat)
    lat2 = math.radians(b.lat)
    dlat = lat2 - lat1
    dlon = math.radians(b.lon - a.lon)

    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    # clamp: float error can push h a hair above 1 for antipodal points
    h = min(1.0, h)
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def to_geo_points(coordinates: Iterable[Sequence[float]]) -> Tuple[GeoPoint, ...]:
    """
    Convert provider GeoJSON positions ([lon, lat] or [lon, lat, elevation])
    to GeoPoints.
    """
    return tuple(GeoPoint(lat=float(lat), lon=float(lon)) for lon, lat, *_ in coordinates)
