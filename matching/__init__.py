#Expose the route-matching pipeline pieces:
#Policy (thresholds / caps)
#Result models
#Matcher orchestrator (the “one call” entry point)

from .policy import MatchingPolicy, default_matching_policy
from .models import MatchCandidate, RouteMatchResult
from .matcher import find_pharmacies_along_route, match_route

__all__ = [
    "MatchingPolicy",
    "default_matching_policy",
    "MatchCandidate",
    "RouteMatchResult",
    "find_pharmacies_along_route",
    "match_route",
]
