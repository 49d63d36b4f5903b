#Purpose: OpenRouteService adapter, same contract as OSRMClient.
#Used when ROUTING_PROVIDER=ors. Talks to the ORS directions API and
#normalizes the GeoJSON answer into a RoutePolyline.
#No matching rules here.

from dotenv import load_dotenv
import logging
import os
from typing import List, Optional
import requests

from .errors import RoutingProviderError
from .geometry import GeoPoint, RoutePolyline, to_geo_points

load_dotenv()
ORS_API_KEY = os.getenv("ORS_API_KEY")
ORS_BASE_URL = os.getenv("ORS_BASE_URL", "https://api.openrouteservice.org")
DEFAULT_TIMEOUT = float(os.getenv("ROUTING_TIMEOUT_SECONDS", "5"))

logger = logging.getLogger(__name__)


class ORSError(RoutingProviderError):
    """Custom exception for OpenRouteService errors."""
    pass


class OpenRouteServiceClient:
    """
    OpenRouteService Adapter / Client

    - POST /v2/directions/{profile}/geojson with [lon, lat] coordinates
    - Return the first feature as a RoutePolyline
    """
    def __init__(self, api_key: Optional[str] = None, profile: str = "driving-car",
                 timeout: float = DEFAULT_TIMEOUT, base_url: Optional[str] = None,
                 session: Optional[requests.Session] = None):
        self.api_key = api_key or ORS_API_KEY
        self.profile = profile
        self.timeout = timeout
        self.base_url = (base_url or ORS_BASE_URL).rstrip("/")
        self.session = session or requests.Session()

        if not self.api_key:
            raise ValueError("ORS API key not set. Please set ORS_API_KEY in the .env file.")

    def compute_route(self, points: List[GeoPoint]) -> RoutePolyline:
        """
        Request a driving route through the ordered points.

        Raises:
            ValueError: fewer than two points
            ORSError: non-success status or unusable payload
            requests.RequestException: network failure / timeout
        """
        if len(points) < 2:
            raise ValueError("At least two coordinates are required to compute a route.")

        url = f"{self.base_url}/v2/directions/{self.profile}/geojson"
        response = self.session.post(
            url,
            json={"coordinates": [[p.lon, p.lat] for p in points]},
            headers={
                "Authorization": self.api_key,
                "Content-Type": "application/json",
            },
            timeout=self.timeout,
        )

        if not response.ok:
            raise ORSError(f"ORS error {response.status_code}: {response.text}",
                           status_code=response.status_code, body=response.text)

        try:
            feature = response.json()["features"][0]
            summary = feature["properties"]["summary"]
            polyline = RoutePolyline.new(
                to_geo_points(feature["geometry"]["coordinates"]),
                # ORS omits duration entirely for zero-length routes
                summary.get("duration", 0.0),
                summary.get("distance"),
            )
        except (KeyError, IndexError, TypeError, ValueError, AttributeError) as exc:
            raise ORSError(f"Malformed ORS route payload: {exc}",
                           status_code=response.status_code) from exc

        logger.debug("ORS route: %d points, %.0f s", len(polyline), polyline.duration_seconds)
        return polyline
