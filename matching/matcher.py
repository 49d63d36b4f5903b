"""
Purpose: The route-matching orchestrator (single entry point).
What it does:

Coordinates the pipeline end-to-end for one request:

- measures every located pharmacy against the route polyline (polyline_index.py)

- drops pharmacies farther than the proximity threshold

- fans out ETA + detour estimation per surviving pharmacy on a bounded
  thread pool (eta_service.py, detour.py)

- merges visited flags, sorts by distance to the route, truncates

Failure model:
- RouteUnavailable / DegenerateRoute abort the request, no partial list.
- A failed detour call only blanks that pharmacy's detour_minutes.

Rule: Matcher is the only file other modules should call directly for matching.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Container, Iterable, List, Optional, Tuple

from pharmacies.models import Pharmacy
from routing.detour import estimate_detour_minutes
from routing.eta_service import estimate_eta_minutes, seconds_to_minutes
from routing.geometry import GeoPoint, RoutePolyline
from routing.polyline_index import ClosestVertex, RouteIndex
from routing.route_service import RoutingClient, fetch_route

from .models import MatchCandidate, RouteMatchResult
from .policy import MatchingPolicy, default_matching_policy

logger = logging.getLogger(__name__)


def _visited_snapshot(visited: Optional[Container[str]]) -> Container[str]:
    # read once at request start; later writes don't leak into this request
    if visited is None:
        return frozenset()
    if hasattr(visited, "snapshot"):
        return visited.snapshot()
    return visited


def _evaluate_candidate(
    pharmacy: Pharmacy,
    closest: ClosestVertex,
    *,
    route_length: int,
    route_duration_minutes: float,
    direct_duration_minutes: int,
    start: GeoPoint,
    end: GeoPoint,
    router: RoutingClient,
    visited: Container[str],
) -> MatchCandidate:
    """Compute one pharmacy's candidate record. Touches no shared state."""
    eta = estimate_eta_minutes(closest.index, route_length, route_duration_minutes)
    detour = estimate_detour_minutes(router, start, end, pharmacy.location, direct_duration_minutes)

    return MatchCandidate(
        pharmacy=pharmacy,
        distance_to_route_km=closest.distance_km,
        route_vertex_index=closest.index,
        eta_minutes=eta,
        detour_minutes=detour,
        visited=pharmacy.cip in visited,
    )


def match_route(
    route: RoutePolyline,
    pharmacies: Iterable[Pharmacy],
    *,
    start: GeoPoint,
    end: GeoPoint,
    router: RoutingClient,
    visited: Optional[Container[str]] = None,
    policy: Optional[MatchingPolicy] = None,
) -> RouteMatchResult:
    """
    Rank the pharmacies worth a stop along `route`.

    Parameters
    ----------
    route:
        Base start → end route (geometry + duration) from the routing provider.
    pharmacies:
        Candidate pool, typically the whole read-only dataset.
    start, end:
        Trip endpoints, used for the via-pharmacy detour routes.
    router:
        Routing provider client used for the detour calls.
    visited:
        Visited CIPs; a store with `snapshot()` or any container.
    policy:
        Threshold / result cap / fan-out width.

    Raises
    ------
    DegenerateRoute:
        The route geometry has fewer than two points.
    """
    policy = policy or default_matching_policy()
    policy.validate()

    index = RouteIndex(route.points)
    visited_now = _visited_snapshot(visited)
    direct_minutes = seconds_to_minutes(route.duration_seconds)

    # 1) proximity filter (cheap, sequential, no I/O)
    nearby: List[Tuple[Pharmacy, ClosestVertex]] = []
    for pharmacy in pharmacies:
        if not pharmacy.has_location:
            continue
        closest = index.closest_vertex(pharmacy.location)
        if closest.distance_km > policy.proximity_threshold_km:
            continue
        nearby.append((pharmacy, closest))

    if not nearby:
        logger.info("No pharmacy within %.1f km of a %d-point route",
                    policy.proximity_threshold_km, len(index))
        return RouteMatchResult(candidates=[], total_duration_minutes=direct_minutes)

    # 2) fan-out: one detour call per surviving pharmacy; results keep input order
    workers = min(policy.max_concurrent_detours, len(nearby))
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="detour") as pool:
        futures = [
            pool.submit(
                _evaluate_candidate,
                pharmacy,
                closest,
                route_length=len(index),
                route_duration_minutes=route.duration_minutes,
                direct_duration_minutes=direct_minutes,
                start=start,
                end=end,
                router=router,
                visited=visited_now,
            )
            for pharmacy, closest in nearby
        ]
        candidates = [future.result() for future in futures]

    # 3) deterministic assembly: stable sort keeps input order between ties
    candidates.sort(key=lambda c: c.distance_to_route_km)
    candidates = candidates[:policy.max_results]

    missing = sum(1 for c in candidates if c.detour_minutes is None)
    logger.info("Matched %d/%d pharmacies near route (%d without detour)",
                len(candidates), len(nearby), missing)

    return RouteMatchResult(candidates=candidates, total_duration_minutes=direct_minutes)


def find_pharmacies_along_route(
    start: GeoPoint,
    end: GeoPoint,
    pharmacies: Iterable[Pharmacy],
    *,
    router: RoutingClient,
    visited: Optional[Container[str]] = None,
    policy: Optional[MatchingPolicy] = None,
) -> RouteMatchResult:
    """
    Request-level entry point: fetch the start → end route, then match.

    Raises RouteUnavailable when the base route cannot be fetched and
    DegenerateRoute when it comes back with fewer than two points.
    """
    route = fetch_route(router, [start, end])
    return match_route(
        route,
        pharmacies,
        start=start,
        end=end,
        router=router,
        visited=visited,
        policy=policy,
    )
