#Purpose: The OSRM “adapter/client”.
#Sole responsibility: talk to OSRM via HTTP and return normalized outputs.
#Encapsulates OSRM-specific details:
#coordinate formatting (lon,lat)
#URL construction (/route)
#timeouts and error handling
#parsing response JSON into a RoutePolyline
#It should not contain matching rules or detour logic.


from dotenv import load_dotenv
import logging
import os
from typing import List, Optional
import requests

from .errors import RoutingProviderError
from .geometry import GeoPoint, RoutePolyline, to_geo_points

# Read OSRM base URL from environment
# Example in .env:
# OSRM_BASE_URL=http://router.project-osrm.org
load_dotenv()
BASE_URL = os.getenv("OSRM_BASE_URL")
DEFAULT_PROFILE = os.getenv("OSRM_PROFILE", "driving")
DEFAULT_TIMEOUT = float(os.getenv("ROUTING_TIMEOUT_SECONDS", "5"))

logger = logging.getLogger(__name__)


class OSRMError(RoutingProviderError):
    """Custom exception for OSRM client errors."""
    pass


class OSRMClient:
    """
    OSRM Adapter / Client

    Sole responsibility:
    - Talk to OSRM via HTTP
    - Convert internal GeoPoint(lat, lon) → OSRM (lon,lat)
    - Return the route duration and its full geometry

    """
    def __init__(self, base_url: Optional[str] = None, profile: str = DEFAULT_PROFILE,
                 timeout: float = DEFAULT_TIMEOUT, session: Optional[requests.Session] = None):
        self.base_url = (base_url or BASE_URL or "").rstrip("/")
        self.timeout = timeout #the time to wait for a response from OSRM before giving up
        self.profile = profile #the mode of transportation (driving, walking, cycling)
        self.session = session or requests.Session()

        if not self.base_url:
            raise ValueError("OSRM base URL not set. Please set OSRM_BASE_URL in the .env file.")

    #----------------
    # Internal helpers
    #----------------
    def format_coordinates(self, points: List[GeoPoint]) -> str:
        """Convert list of GeoPoint to OSRM format 'lon,lat;lon,lat;...'"""
        return ';'.join(f"{p.lon},{p.lat}" for p in points)

    #----------------
    # route service
    #----------------
    def compute_route(self, points: List[GeoPoint]) -> RoutePolyline:
        """
        calls the OSRM /route endpoint for the ordered points and returns
        the first route as a RoutePolyline (duration + geometry).

        Raises:
            ValueError: fewer than two points
            OSRMError: OSRM answered with a non-Ok code or no route
            requests.RequestException: network failure / timeout
        """
        if len(points) < 2:
            raise ValueError("At least two coordinates are required to compute a route.")

        url = f"{self.base_url}/route/v1/{self.profile}/{self.format_coordinates(points)}"

        response = self.session.get(
            url,
            params={
                "overview": "full", # we need every vertex of the route
                "geometries": "geojson",
            },
            timeout=self.timeout,
        )

        try:
            data = response.json()
        except ValueError as exc:
            raise OSRMError(f"OSRM returned a non-JSON response ({response.status_code})",
                            status_code=response.status_code, body=response.text) from exc

        #validating OSRM response
        if not isinstance(data, dict):
            raise OSRMError("OSRM returned an unexpected JSON payload",
                            status_code=response.status_code, body=response.text)

        if data.get("code") != "Ok":
            raise OSRMError(f"OSRM error: {data.get('message', data.get('code', 'Unknown error'))}",
                            status_code=response.status_code)

        routes = data.get("routes") or []
        if not routes:
            raise OSRMError("OSRM returned no route", status_code=response.status_code)

        try:
            route = routes[0] #take the first route (OSRM may return alternatives)
            polyline = RoutePolyline.new(
                to_geo_points(route["geometry"]["coordinates"]),
                route["duration"],
                route.get("distance"),
            )
        except (KeyError, IndexError, TypeError, ValueError, AttributeError) as exc:
            raise OSRMError(f"Malformed OSRM route payload: {exc}",
                            status_code=response.status_code) from exc

        logger.debug("OSRM route: %d points, %.0f s", len(polyline), polyline.duration_seconds)
        return polyline
