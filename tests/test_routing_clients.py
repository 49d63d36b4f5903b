import pytest
import requests

from routing import osrm_client
from routing.geometry import GeoPoint, RoutePolyline
from routing.ors_client import OpenRouteServiceClient, ORSError
from routing.osrm_client import OSRMClient, OSRMError
from routing.route_service import RouteUnavailable, fetch_route, get_routing_client

from conftest import MockRouter

NANTES = GeoPoint(47.218371, -1.553621)
ANGERS = GeoPoint(47.478419, -0.563166)


class FakeResponse:
    def __init__(self, payload=None, status_code=200, text=""):
        self._payload = payload
        self.status_code = status_code
        self.text = text

    @property
    def ok(self):
        return 200 <= self.status_code < 300

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class FakeSession:
    """Records the outgoing request and answers with a canned response."""
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []

    def _answer(self, method, url, **kwargs):
        self.requests.append((method, url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response

    def get(self, url, **kwargs):
        return self._answer("GET", url, **kwargs)

    def post(self, url, **kwargs):
        return self._answer("POST", url, **kwargs)


OSRM_OK = {
    "code": "Ok",
    "routes": [{
        "duration": 5321.4,
        "distance": 88123.0,
        "geometry": {"type": "LineString", "coordinates": [
            [-1.553621, 47.218371], [-1.2, 47.3], [-0.563166, 47.478419],
        ]},
    }],
}


# ---- OSRM ----

def test_osrm_route_is_parsed_to_polyline():
    session = FakeSession(FakeResponse(OSRM_OK))
    client = OSRMClient(base_url="http://osrm.local/", session=session, timeout=3)

    route = client.compute_route([NANTES, ANGERS])

    assert isinstance(route, RoutePolyline)
    assert route.duration_seconds == 5321.4
    assert route.distance_meters == 88123.0
    # GeoJSON [lon, lat] comes back as GeoPoint(lat, lon)
    assert route.points[1] == GeoPoint(47.3, -1.2)
    assert len(route) == 3

    method, url, kwargs = session.requests[0]
    assert method == "GET"
    assert url == "http://osrm.local/route/v1/driving/-1.553621,47.218371;-0.563166,47.478419"
    assert kwargs["params"] == {"overview": "full", "geometries": "geojson"}
    assert kwargs["timeout"] == 3


def test_osrm_error_code_raises():
    session = FakeSession(FakeResponse({"code": "NoRoute", "message": "Impossible route between points"}))
    client = OSRMClient(base_url="http://osrm.local", session=session)

    with pytest.raises(OSRMError, match="Impossible route"):
        client.compute_route([NANTES, ANGERS])


def test_osrm_non_json_response_raises():
    session = FakeSession(FakeResponse(None, status_code=502, text="<html>Bad gateway</html>"))
    client = OSRMClient(base_url="http://osrm.local", session=session)

    with pytest.raises(OSRMError) as excinfo:
        client.compute_route([NANTES, ANGERS])

    assert excinfo.value.status_code == 502


def test_osrm_missing_geometry_raises():
    session = FakeSession(FakeResponse({"code": "Ok", "routes": [{"duration": 10}]}))
    client = OSRMClient(base_url="http://osrm.local", session=session)

    with pytest.raises(OSRMError):
        client.compute_route([NANTES, ANGERS])


def test_osrm_needs_two_points():
    client = OSRMClient(base_url="http://osrm.local", session=FakeSession())

    with pytest.raises(ValueError):
        client.compute_route([NANTES])


def test_osrm_requires_base_url(monkeypatch):
    monkeypatch.setattr(osrm_client, "BASE_URL", None)

    with pytest.raises(ValueError):
        OSRMClient()


# ---- OpenRouteService ----

ORS_OK = {
    "type": "FeatureCollection",
    "features": [{
        "geometry": {"type": "LineString", "coordinates": [
            [-1.553621, 47.218371, 12.0], [-0.563166, 47.478419, 20.0],
        ]},
        "properties": {"summary": {"distance": 90012.3, "duration": 5400.0}},
    }],
}


def test_ors_route_is_parsed_to_polyline():
    session = FakeSession(FakeResponse(ORS_OK))
    client = OpenRouteServiceClient(api_key="secret", session=session)

    route = client.compute_route([NANTES, ANGERS])

    assert route.duration_seconds == 5400.0
    assert route.points == (NANTES, ANGERS)

    method, url, kwargs = session.requests[0]
    assert method == "POST"
    assert url.endswith("/v2/directions/driving-car/geojson")
    assert kwargs["json"] == {"coordinates": [[-1.553621, 47.218371], [-0.563166, 47.478419]]}
    assert kwargs["headers"]["Authorization"] == "secret"


def test_ors_error_status_raises():
    session = FakeSession(FakeResponse({"error": "quota"}, status_code=403, text='{"error": "quota"}'))
    client = OpenRouteServiceClient(api_key="secret", session=session)

    with pytest.raises(ORSError) as excinfo:
        client.compute_route([NANTES, ANGERS])

    assert excinfo.value.status_code == 403
    assert "quota" in excinfo.value.body


def test_ors_empty_features_raises():
    session = FakeSession(FakeResponse({"features": []}))
    client = OpenRouteServiceClient(api_key="secret", session=session)

    with pytest.raises(ORSError):
        client.compute_route([NANTES, ANGERS])


# ---- route service ----

def test_fetch_route_returns_provider_route(straight_route):
    assert fetch_route(MockRouter(base_route=straight_route), [NANTES, ANGERS]) is straight_route


@pytest.mark.parametrize("error", [
    requests.ConnectionError("refused"),
    requests.Timeout("timed out"),
    OSRMError("OSRM error: NoRoute"),
])
def test_fetch_route_failure_is_route_unavailable(error):
    router = MockRouter(base_error=error)

    with pytest.raises(RouteUnavailable) as excinfo:
        fetch_route(router, [NANTES, ANGERS])

    assert excinfo.value.__cause__ is error
    assert excinfo.value.points == (NANTES, ANGERS)


def test_network_error_from_real_client_is_route_unavailable():
    client = OSRMClient(base_url="http://osrm.local", session=FakeSession(error=requests.ConnectionError("down")))

    with pytest.raises(RouteUnavailable):
        fetch_route(client, [NANTES, ANGERS])


def test_routing_client_factory():
    assert isinstance(get_routing_client("osrm", base_url="http://osrm.local"), OSRMClient)
    assert isinstance(get_routing_client("ORS", api_key="secret"), OpenRouteServiceClient)

    with pytest.raises(ValueError):
        get_routing_client("valhalla")


# ---- malformed provider payloads ----

OSRM_GEOMETRY = {"type": "LineString", "coordinates": [[-1.553621, 47.218371], [-0.563166, 47.478419]]}


@pytest.mark.parametrize("payload", [
    {"code": "Ok", "routes": [{"geometry": OSRM_GEOMETRY, "duration": None}]},
    {"code": "Ok", "routes": [{"geometry": OSRM_GEOMETRY, "duration": "fast"}]},
    {"code": "Ok", "routes": [{"geometry": {"coordinates": [[-1.5, None]]}, "duration": 10}]},
    {"code": "Ok", "routes": ["not a route"]},
    [{"code": "Ok"}],
])
def test_malformed_osrm_payload_is_route_unavailable(payload):
    client = OSRMClient(base_url="http://osrm.local", session=FakeSession(FakeResponse(payload)))

    with pytest.raises(RouteUnavailable) as excinfo:
        fetch_route(client, [NANTES, ANGERS])

    assert isinstance(excinfo.value.__cause__, OSRMError)


@pytest.mark.parametrize("payload", [
    {"features": [{"geometry": ORS_OK["features"][0]["geometry"], "properties": {"summary": []}}]},
    {"features": [{"geometry": ORS_OK["features"][0]["geometry"], "properties": {"summary": {"duration": None}}}]},
    {"features": [{"geometry": None, "properties": {"summary": {"duration": 10.0}}}]},
    ["features"],
])
def test_malformed_ors_payload_is_route_unavailable(payload):
    client = OpenRouteServiceClient(api_key="secret", session=FakeSession(FakeResponse(payload)))

    with pytest.raises(RouteUnavailable) as excinfo:
        fetch_route(client, [NANTES, ANGERS])

    assert isinstance(excinfo.value.__cause__, ORSError)


class BrokenRouter:
    """A routing client whose own code fails while building the route."""
    def compute_route(self, points):
        raise TypeError("'NoneType' object is not subscriptable")


def test_unexpected_client_error_is_route_unavailable():
    with pytest.raises(RouteUnavailable):
        fetch_route(BrokenRouter(), [NANTES, ANGERS])
