import random

import pytest

from routing.geometry import GeoPoint, distance_km
from routing.polyline_index import DegenerateRoute, RouteIndex, closest_vertex


def test_closest_vertex_on_straight_route():
    index = RouteIndex([GeoPoint(0, 0), GeoPoint(0, 1), GeoPoint(0, 2)])

    closest = index.closest_vertex(GeoPoint(0.01, 1))

    assert closest.index == 1
    assert closest.distance_km == pytest.approx(1.112, abs=0.01)


def test_ties_keep_the_lowest_index():
    """A point exactly between two vertices resolves to the first one."""
    index = RouteIndex([GeoPoint(0, 0), GeoPoint(0, 2), GeoPoint(0, 4)])

    closest = index.closest_vertex(GeoPoint(0, 1))

    assert closest.index == 0


def test_repeated_vertex_resolves_to_first_occurrence():
    points = [GeoPoint(0, 0), GeoPoint(1, 1), GeoPoint(0, 3), GeoPoint(1, 1)]
    assert closest_vertex(points, GeoPoint(1, 1)).index == 1


def test_random_routes_match_brute_force():
    """
    For random routes and queries the index stays in range, the distance is
    non-negative and equals the brute-force minimum.
    """
    rng = random.Random(7)
    for _ in range(50):
        n = rng.randint(2, 60)
        points = [GeoPoint(47 + rng.uniform(-0.5, 0.5), -1.5 + rng.uniform(-0.5, 0.5)) for _ in range(n)]
        query = GeoPoint(47 + rng.uniform(-1, 1), -1.5 + rng.uniform(-1, 1))

        closest = RouteIndex(points).closest_vertex(query)
        distances = [distance_km(p, query) for p in points]

        assert 0 <= closest.index <= n - 1
        assert closest.distance_km >= 0
        assert closest.distance_km == min(distances)
        assert closest.index == distances.index(min(distances))


@pytest.mark.parametrize("points", [[], [GeoPoint(0, 0)]])
def test_degenerate_route_is_rejected(points):
    with pytest.raises(DegenerateRoute):
        RouteIndex(points)

    with pytest.raises(DegenerateRoute):
        closest_vertex(points, GeoPoint(0, 0))
