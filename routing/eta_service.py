#Purpose: ETA estimation policy.
#Converts routing outputs into route-relative ETA / minute figures used by:
#the along-route pharmacy list ("reached in ~X min")
#detour estimation (whole-minute durations)
#Keeps ETA logic separate from route computation.

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 going up (not banker's rounding)."""
    return int(math.floor(value + 0.5))


def seconds_to_minutes(seconds: float) -> int:
    """Whole minutes for a provider duration in seconds."""
    return round_half_up(seconds / 60.0)


def estimate_eta_minutes(closest_index: int, route_length: int, total_duration_minutes: float) -> int:
    """
    Estimated minutes from the route start to vertex `closest_index`.

    eta = round(closest_index / route_length * total_duration_minutes)

    Linear-position approximation: assumes uniform speed along the whole
    route and time-uniform vertex spacing. Traffic and uneven segment lengths
    are ignored.
    """
    if route_length <= 0:
        raise ValueError("route_length must be > 0")
    if closest_index < 0:
        raise ValueError("closest_index must be >= 0")
    if total_duration_minutes < 0:
        raise ValueError("total_duration_minutes must be >= 0")

    return round_half_up(closest_index / route_length * total_duration_minutes)
