from rest_framework import serializers


# ===== Query parameters =====

class CoordinatesQuerySerializer(serializers.Serializer):
    lat = serializers.FloatField(min_value=-90, max_value=90)
    lng = serializers.FloatField(min_value=-180, max_value=180)


class NearbySearchQuerySerializer(CoordinatesQuerySerializer):
    """
    Query of `GET /api/places/search-nearby/`.

    `radius` is in metres (at most 50 km, 1500 m by default) and `keyword` is the search term,
    for example "restaurante" or "farmácia".
    """
    radius = serializers.IntegerField(min_value=1, max_value=50000, default=1500)
    keyword = serializers.CharField(min_length=2, max_length=100)
    type = serializers.CharField(required=False, max_length=50)


class GeocodeQuerySerializer(serializers.Serializer):
    address = serializers.CharField(min_length=5, max_length=200)


class DistanceQuerySerializer(serializers.Serializer):
    lat1 = serializers.FloatField(min_value=-90, max_value=90)
    lng1 = serializers.FloatField(min_value=-180, max_value=180)
    lat2 = serializers.FloatField(min_value=-90, max_value=90)
    lng2 = serializers.FloatField(min_value=-180, max_value=180)


class PictureQuerySerializer(serializers.Serializer):
    photoReference = serializers.CharField(max_length=500)
    maxWidth = serializers.IntegerField(min_value=1, max_value=1600, default=400)


class SuggestionsQuerySerializer(serializers.Serializer):
    q = serializers.CharField(max_length=100)
    lat = serializers.FloatField(required=False, min_value=-90, max_value=90)
    lng = serializers.FloatField(required=False, min_value=-180, max_value=180)


class StaticMapQuerySerializer(CoordinatesQuerySerializer):
    zoom = serializers.IntegerField(min_value=1, max_value=20, default=15)
    width = serializers.IntegerField(min_value=100, max_value=1280, default=400)
    height = serializers.IntegerField(min_value=100, max_value=1280, default=300)


# ===== Responses =====
# Providers return snake_case dicts; these serializers rename the keys for the API.

class LocationSerializer(serializers.Serializer):
    lat = serializers.FloatField()
    lng = serializers.FloatField()


class PhotoSerializer(serializers.Serializer):
    photoReference = serializers.CharField(source='reference')
    width = serializers.IntegerField()
    height = serializers.IntegerField()


class PlaceSerializer(serializers.Serializer):
    """A place summary as returned by nearby search."""
    placeId = serializers.CharField(source='place_id')
    name = serializers.CharField()
    address = serializers.CharField()
    location = LocationSerializer()
    rating = serializers.FloatField()
    userRatingsTotal = serializers.IntegerField(source='rating_count')
    types = serializers.ListField(child=serializers.CharField())
    priceLevel = serializers.IntegerField(source='price_level')
    photos = PhotoSerializer(many=True)
    distanceKm = serializers.FloatField(source='distance_km')


class OpeningHoursSerializer(serializers.Serializer):
    openNow = serializers.BooleanField(source='open_now')
    weekdayText = serializers.ListField(source='weekday_text', child=serializers.CharField())


class AccessibilitySerializer(serializers.Serializer):
    entrance = serializers.BooleanField(allow_null=True)
    restroom = serializers.BooleanField(allow_null=True)
    seating = serializers.BooleanField(allow_null=True)
    parking = serializers.BooleanField(allow_null=True)


class PlaceDetailSerializer(PlaceSerializer):
    phone = serializers.CharField()
    website = serializers.CharField()
    openingHours = OpeningHoursSerializer(source='opening_hours')
    accessibility = AccessibilitySerializer()


class AddressComponentSerializer(serializers.Serializer):
    longName = serializers.CharField(source='long_name')
    shortName = serializers.CharField(source='short_name')
    types = serializers.ListField(child=serializers.CharField())


class GeocodeResultSerializer(serializers.Serializer):
    formattedAddress = serializers.CharField(source='formatted_address')
    location = LocationSerializer()
    placeId = serializers.CharField(source='place_id')
    addressComponents = AddressComponentSerializer(source='address_components', many=True)


class SuggestionSerializer(serializers.Serializer):
    id = serializers.CharField()
    name = serializers.CharField()
    fullText = serializers.CharField(source='full_text')
    category = serializers.CharField()
