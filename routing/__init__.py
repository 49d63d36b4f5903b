#Marks routing as a package.
#Re-exports the public APIs (clients, route fetch, polyline index, ETA, detour)
#so other modules import from routing without knowing internal file names.
#No business logic.

from .geometry import GeoPoint, RoutePolyline, distance_km
from .errors import RoutingProviderError
from .osrm_client import OSRMClient, OSRMError
from .ors_client import OpenRouteServiceClient, ORSError
from .route_service import RouteUnavailable, RoutingClient, fetch_route, get_routing_client
from .polyline_index import ClosestVertex, DegenerateRoute, RouteIndex, closest_vertex
from .eta_service import estimate_eta_minutes, seconds_to_minutes
from .detour import DetourUnavailable, compute_detour_minutes, estimate_detour_minutes

__all__ = [
           "GeoPoint",
           "RoutePolyline",
           "distance_km",
           "RoutingProviderError",
           "OSRMClient",
           "OSRMError",
           "OpenRouteServiceClient",
           "ORSError",
           "RouteUnavailable",
           "RoutingClient",
           "fetch_route",
           "get_routing_client",
           "ClosestVertex",
           "DegenerateRoute",
           "RouteIndex",
           "closest_vertex",
           "estimate_eta_minutes",
           "seconds_to_minutes",
           "DetourUnavailable",
           "compute_detour_minutes",
           "estimate_detour_minutes",
           ]
