"""
Purpose: Result models for route matching.
What it does:
Defines the per-request, transient MatchCandidate and the RouteMatchResult
handed back to the serving layer. Never persisted.

Rule: No routing calls, no matching logic. Models only.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from pharmacies.models import Pharmacy


@dataclass(frozen=True)
class MatchCandidate:
    """
    One pharmacy close enough to the route, with its route-relative metrics.
    """
    pharmacy: Pharmacy
    distance_to_route_km: float
    route_vertex_index: int
    eta_minutes: int

    # None when the routing provider could not compute the via route
    detour_minutes: Optional[int] = None
    visited: bool = False


@dataclass(frozen=True)
class RouteMatchResult:
    """
    Output of a matching run: ranked candidates + the direct route duration.
    """
    candidates: List[MatchCandidate] = field(default_factory=list)
    total_duration_minutes: int = 0
