import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from matching import MatchingPolicy, find_pharmacies_along_route
from pharmacies import nearest_pharmacies, nearest_pharmacy
from routing import DegenerateRoute, GeoPoint, RouteUnavailable, fetch_route, seconds_to_minutes

from . import services
from .serializers import (
    MatchCandidateSerializer,
    NearbyPharmacySerializer,
    NearestPharmacySerializer,
    PositionQuerySerializer,
    RouteQuerySerializer,
)

logger = logging.getLogger(__name__)


def _invalid(serializer, message):
    return Response({"error": message, "details": serializer.errors}, status=status.HTTP_400_BAD_REQUEST)


class NearestView(APIView):
    """
    Closest pharmacy to a position, straight-line.
    """

    def get(self, request):
        query = PositionQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return _invalid(query, "Paramètres lat et lon requis")

        position = GeoPoint(query.validated_data['lat'], query.validated_data['lon'])
        nearest = nearest_pharmacy(services.get_dataset(), position)
        if nearest is None:
            return Response({"error": "Aucune pharmacie trouvée"}, status=status.HTTP_404_NOT_FOUND)

        return Response(NearestPharmacySerializer(nearest).data)


class NearestTravelTimeView(APIView):
    """
    Nearest pharmacy plus the driving time to it (`temps_minutes`).

    The pharmacy is still returned when the routing provider is down;
    `temps_minutes` is then null.
    """

    def get(self, request):
        query = PositionQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return _invalid(query, "Paramètres lat et lon requis")

        position = GeoPoint(query.validated_data['lat'], query.validated_data['lon'])
        nearest = nearest_pharmacy(services.get_dataset(), position)
        if nearest is None:
            return Response({"error": "Aucune pharmacie trouvée"}, status=status.HTTP_404_NOT_FOUND)

        travel_minutes = None
        try:
            route = fetch_route(services.get_router(), [position, nearest.pharmacy.location])
            travel_minutes = seconds_to_minutes(route.duration_seconds)
        except (RouteUnavailable, ValueError) as exc:
            logger.warning("Travel time unavailable, answering with distance only: %s", exc)

        data = dict(NearestPharmacySerializer(nearest).data)
        data["temps_minutes"] = travel_minutes
        return Response(data)


class NearbyView(APIView):
    """
    The `limit` closest pharmacies to a position, straight-line.
    """

    def get(self, request):
        query = PositionQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return _invalid(query, "Paramètres lat et lon requis")

        data = query.validated_data
        position = GeoPoint(data['lat'], data['lon'])
        candidates = nearest_pharmacies(services.get_dataset(), position, limit=data['limit'])

        return Response({
            "position": {"lat": position.lat, "lon": position.lon},
            "candidates": NearbyPharmacySerializer(candidates, many=True).data,
        })


class AlongRouteView(APIView):
    """
    Pharmacies worth a stop on the drive from (from_lat, from_lon) to
    (to_lat, to_lon), with route-relative ETA and detour cost.
    """

    def get(self, request):
        query = RouteQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return _invalid(query, "Paramètres from_lat, from_lon, to_lat et to_lon requis")

        data = query.validated_data
        start = GeoPoint(data['from_lat'], data['from_lon'])
        end = GeoPoint(data['to_lat'], data['to_lon'])
        policy = MatchingPolicy(proximity_threshold_km=data['threshold_km'], max_results=data['limit'])

        try:
            result = find_pharmacies_along_route(
                start,
                end,
                services.get_dataset(),
                router=services.get_router(),
                visited=services.get_visited_store(),
                policy=policy,
            )
        except (RouteUnavailable, DegenerateRoute) as exc:
            logger.error("Along-route matching failed: %s", exc)
            return Response(
                {"error": "Itinéraire indisponible", "details": str(exc)},
                status=status.HTTP_502_BAD_GATEWAY,
            )

        return Response({
            "total_duration_minutes": result.total_duration_minutes,
            "candidates": MatchCandidateSerializer(result.candidates, many=True).data,
        })


class VisitedListView(APIView):

    def get(self, request):
        return Response({"visited": sorted(services.get_visited_store().snapshot())})


class VisitedDetailView(APIView):
    """
    Mark (PUT) or clear (DELETE) the visited flag of one pharmacy.
    """

    def _check_known(self, cip):
        if services.get_dataset().get(cip) is None:
            return Response({"error": f"Pharmacie inconnue: {cip}"}, status=status.HTTP_404_NOT_FOUND)
        return None

    def put(self, request, cip):
        unknown = self._check_known(cip)
        if unknown is not None:
            return unknown
        services.get_visited_store().mark(cip)
        return Response({"cip": cip, "visited": True})

    def delete(self, request, cip):
        unknown = self._check_known(cip)
        if unknown is not None:
            return unknown
        services.get_visited_store().unmark(cip)
        return Response({"cip": cip, "visited": False})
