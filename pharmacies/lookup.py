"""
Straight-line lookups around a single position (no route, no detour).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional

from routing.geometry import GeoPoint, distance_km

from .models import Pharmacy


@dataclass(frozen=True)
class NearbyPharmacy:
    pharmacy: Pharmacy
    distance_km: float


def nearest_pharmacies(pharmacies: Iterable[Pharmacy], position: GeoPoint, limit: int = 5) -> List[NearbyPharmacy]:
    """
    The `limit` closest located pharmacies, nearest first.

    Equal distances keep dataset order.
    """
    if limit <= 0:
        return []

    with_distance = [
        NearbyPharmacy(pharmacy=p, distance_km=distance_km(position, p.location))
        for p in pharmacies
        if p.has_location
    ]
    with_distance.sort(key=lambda n: n.distance_km)
    return with_distance[:limit]


def nearest_pharmacy(pharmacies: Iterable[Pharmacy], position: GeoPoint) -> Optional[NearbyPharmacy]:
    nearest = nearest_pharmacies(pharmacies, position, limit=1)
    return nearest[0] if nearest else None
