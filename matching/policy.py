"""
Purpose: Central configuration for route matching.
What it does:

Stores all tunable thresholds/caps for matching pharmacies to a route:

PROXIMITY_THRESHOLD_KM = 10
MAX_RESULTS = 5
MAX_CONCURRENT_DETOURS = 8

Rule: Parameters only. Validation lives here, behaviour lives in matching.matcher.
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class MatchingPolicy:
    """
    Central configuration for one route-matching request.
    """

    # --- Proximity ---
    # Max Haversine distance (km) between a pharmacy and its nearest route
    # vertex. Anything farther is never offered.
    proximity_threshold_km: float = 10.0

    # --- Output size ---
    max_results: int = 5

    # --- Fan-out ---
    # Upper bound on simultaneous detour calls to the routing provider
    # for a single request.
    max_concurrent_detours: int = 8

    def validate(self) -> None:
        """
        Basic sanity checks.
        """
        if self.proximity_threshold_km < 0:
            raise ValueError("proximity_threshold_km must be >= 0")

        if self.max_results < 0:
            raise ValueError("max_results must be >= 0")

        if self.max_concurrent_detours <= 0:
            raise ValueError("max_concurrent_detours must be > 0")


def default_matching_policy() -> MatchingPolicy:
    """
    Convenience factory for the default policy.
    """
    p = MatchingPolicy()
    p.validate()
    return p
