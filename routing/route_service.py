"""
Purpose: Route computation for downstream use.
What it does:
Fetches the base start → end route (polyline geometry + duration) that the
matching engine measures candidates against. It is the "I need an actual
route" module; detour.py is "what does one extra stop cost".

Failure here is fatal for the request: there is nothing to match against
without a route, so every provider error becomes RouteUnavailable.
"""

from __future__ import annotations

import logging
import os
from typing import List, Optional, Protocol, Sequence

import requests

from .errors import RoutingProviderError
from .geometry import GeoPoint, RoutePolyline

logger = logging.getLogger(__name__)


class RoutingClient(Protocol):
    """Anything that can turn an ordered list of points into a RoutePolyline."""

    def compute_route(self, points: List[GeoPoint]) -> RoutePolyline:
        ...


class RouteUnavailable(Exception):
    """Raised when the base route could not be obtained from the provider."""

    def __init__(self, message: str, points: Sequence[GeoPoint] = ()):
        super().__init__(message)
        self.message = message
        self.points = tuple(points)


def fetch_route(router: RoutingClient, points: Sequence[GeoPoint]) -> RoutePolyline:
    """
    Ask the routing provider for the route through `points`.

    Single attempt, no retries. Any provider, network or payload failure is
    re-raised as RouteUnavailable with the original error chained.
    """
    try:
        route = router.compute_route(list(points))
    except (requests.RequestException, RoutingProviderError, ValueError, KeyError, TypeError, AttributeError) as exc:
        logger.error("Base route unavailable for %d points: %s", len(points), exc)
        raise RouteUnavailable(f"Route unavailable: {exc}", points) from exc

    if not isinstance(route, RoutePolyline):
        raise RouteUnavailable("Routing provider returned an unexpected route type", points)

    return route


def get_routing_client(provider: Optional[str] = None, **kwargs) -> RoutingClient:
    """Factory function to get the configured routing provider client."""
    provider = (provider or os.getenv("ROUTING_PROVIDER", "osrm")).lower()

    if provider == "osrm":
        from .osrm_client import OSRMClient
        return OSRMClient(**kwargs)
    elif provider == "ors":
        from .ors_client import OpenRouteServiceClient
        return OpenRouteServiceClient(**kwargs)
    else:
        raise ValueError(f"Unknown routing provider: {provider}")
