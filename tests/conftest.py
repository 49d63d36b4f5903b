import threading
from typing import Dict, Iterable, List, Optional

import pytest

from pharmacies.models import Pharmacy
from routing.geometry import GeoPoint, RoutePolyline
from routing.osrm_client import OSRMError


class MockRouter:
    """
    Fake routing provider.

    - two-point requests answer with `base_route` (or raise `base_error`)
    - three-point requests (start → candidate → end) answer with the
      candidate's entry in `via_seconds`, else `default_via_seconds`
    - candidates listed in `failing` raise OSRMError
    """
    def __init__(
        self,
        base_route: Optional[RoutePolyline] = None,
        via_seconds: Optional[Dict[GeoPoint, float]] = None,
        failing: Iterable[GeoPoint] = (),
        base_error: Optional[Exception] = None,
        default_via_seconds: float = 1500.0,
    ):
        self.base_route = base_route
        self.via_seconds = dict(via_seconds or {})
        self.failing = set(failing)
        self.base_error = base_error
        self.default_via_seconds = default_via_seconds
        self.calls: List[tuple] = []
        self._lock = threading.Lock()

    def compute_route(self, points):
        with self._lock:
            self.calls.append(tuple(points))

        if len(points) == 2:
            if self.base_error is not None:
                raise self.base_error
            return self.base_route

        candidate = points[1]
        if candidate in self.failing:
            raise OSRMError("OSRM error: NoRoute")
        seconds = self.via_seconds.get(candidate, self.default_via_seconds)
        return RoutePolyline.new(points, seconds)

    @property
    def detour_calls(self):
        return [c for c in self.calls if len(c) == 3]


def make_pharmacy(cip: str, lat: Optional[float], lon: Optional[float], name: str = None) -> Pharmacy:
    location = GeoPoint(lat, lon) if lat is not None and lon is not None else None
    return Pharmacy(
        cip=cip,
        name=name or f"PHARMACIE {cip}",
        location=location,
        city="NANTES",
        group="GIPHAR",
        chain="INDEPENDANT",
    )


@pytest.fixture
def straight_route():
    # 3 vertices along the equator, 20 minutes end to end
    return RoutePolyline.new([GeoPoint(0, 0), GeoPoint(0, 1), GeoPoint(0, 2)], duration_seconds=1200)


@pytest.fixture
def route_endpoints():
    return GeoPoint(0, 0), GeoPoint(0, 2)


@pytest.fixture
def mock_router(straight_route):
    return MockRouter(base_route=straight_route)
