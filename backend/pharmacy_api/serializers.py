from rest_framework import serializers

from pharmacies import waze_url


# ---- query parameters ----

class PositionQuerySerializer(serializers.Serializer):
    lat = serializers.FloatField(min_value=-90, max_value=90)
    lon = serializers.FloatField(min_value=-180, max_value=180)
    limit = serializers.IntegerField(min_value=1, max_value=50, default=5)


class RouteQuerySerializer(serializers.Serializer):
    from_lat = serializers.FloatField(min_value=-90, max_value=90)
    from_lon = serializers.FloatField(min_value=-180, max_value=180)
    to_lat = serializers.FloatField(min_value=-90, max_value=90)
    to_lon = serializers.FloatField(min_value=-180, max_value=180)
    threshold_km = serializers.FloatField(min_value=0, default=10.0)
    limit = serializers.IntegerField(min_value=1, max_value=50, default=5)


# ---- responses ----

class NearestPharmacySerializer(serializers.Serializer):
    """Single nearest pharmacy, in the shape the mobile page reads."""
    nom = serializers.CharField(source='pharmacy.name')
    ville = serializers.CharField(source='pharmacy.city')
    matrice = serializers.CharField(source='pharmacy.chain')
    groupement = serializers.CharField(source='pharmacy.group')
    distance_km = serializers.SerializerMethodField()
    waze_url = serializers.SerializerMethodField()

    def get_distance_km(self, obj):
        return round(obj.distance_km, 2)

    def get_waze_url(self, obj):
        return waze_url(obj.pharmacy.location)


class NearbyPharmacySerializer(serializers.Serializer):
    nom = serializers.CharField(source='pharmacy.name')
    ville = serializers.CharField(source='pharmacy.city')
    latitude = serializers.FloatField(source='pharmacy.location.lat')
    longitude = serializers.FloatField(source='pharmacy.location.lon')
    distance_km = serializers.SerializerMethodField()

    def get_distance_km(self, obj):
        return round(obj.distance_km, 2)


class MatchCandidateSerializer(serializers.Serializer):
    cip = serializers.CharField(source='pharmacy.cip')
    name = serializers.CharField(source='pharmacy.name')
    city = serializers.CharField(source='pharmacy.city')
    group = serializers.CharField(source='pharmacy.group')
    chain = serializers.CharField(source='pharmacy.chain')
    lat = serializers.FloatField(source='pharmacy.location.lat')
    lon = serializers.FloatField(source='pharmacy.location.lon')
    distance_to_route_km = serializers.SerializerMethodField()
    route_vertex_index = serializers.IntegerField()
    eta_minutes = serializers.IntegerField()
    detour_minutes = serializers.IntegerField(allow_null=True)
    visited = serializers.BooleanField()
    waze_url = serializers.SerializerMethodField()

    def get_distance_to_route_km(self, obj):
        return round(obj.distance_to_route_km, 2)

    def get_waze_url(self, obj):
        return waze_url(obj.pharmacy.location)
