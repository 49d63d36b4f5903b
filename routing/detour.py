"""
Purpose: Marginal driving-time cost of one extra stop.
What it does:
Asks the routing provider for start → candidate → end and compares its
duration with the already-known direct start → end duration.

Failures are per-candidate: they degrade that candidate's detour to None and
never abort the surrounding matching request.
"""

from __future__ import annotations

import logging
from typing import Optional

import requests

from .errors import RoutingProviderError
from .eta_service import seconds_to_minutes
from .geometry import GeoPoint
from .route_service import RoutingClient

logger = logging.getLogger(__name__)


class DetourUnavailable(Exception):
    """The via-candidate route could not be computed."""

    def __init__(self, message: str, candidate: GeoPoint = None):
        super().__init__(message)
        self.message = message
        self.candidate = candidate


def compute_detour_minutes(
    router: RoutingClient,
    start: GeoPoint,
    end: GeoPoint,
    candidate: GeoPoint,
    direct_duration_minutes: int,
) -> int:
    """
    Extra minutes of driving for inserting `candidate` between start and end.

    Clamped at zero: provider rounding or nondeterminism can make the
    three-point route look faster than the direct one.

    Raises:
        DetourUnavailable: on any provider, network or payload failure.
    """
    try:
        via = router.compute_route([start, candidate, end])
        via_minutes = seconds_to_minutes(via.duration_seconds)
    except (requests.RequestException, RoutingProviderError, ValueError, KeyError, TypeError, AttributeError) as exc:
        raise DetourUnavailable(f"Detour route failed: {exc}", candidate) from exc

    return max(0, via_minutes - int(direct_duration_minutes))


def estimate_detour_minutes(
    router: RoutingClient,
    start: GeoPoint,
    end: GeoPoint,
    candidate: GeoPoint,
    direct_duration_minutes: int,
) -> Optional[int]:
    """
    Same as compute_detour_minutes, but any failed call yields None.

    One attempt per call; no retries.
    """
    try:
        return compute_detour_minutes(router, start, end, candidate, direct_duration_minutes)
    except DetourUnavailable as exc:
        logger.warning("Detour unavailable for (%.5f, %.5f): %s",
                       candidate.lat, candidate.lon, exc.__cause__ or exc)
        return None
    except Exception:
        # a custom client failing in its own way still only costs this candidate
        logger.exception("Unexpected error computing detour for (%.5f, %.5f)",
                         candidate.lat, candidate.lon)
        return None
