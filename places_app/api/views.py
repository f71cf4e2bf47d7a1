from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from core.exceptions import ConfigurationError, NotFoundError

from ..geo import haversine_km
from ..providers import get_provider
from .serializers import (
    CoordinatesQuerySerializer,
    DistanceQuerySerializer,
    GeocodeQuerySerializer,
    GeocodeResultSerializer,
    NearbySearchQuerySerializer,
    PictureQuerySerializer,
    PlaceDetailSerializer,
    PlaceSerializer,
    StaticMapQuerySerializer,
    SuggestionSerializer,
    SuggestionsQuerySerializer,
)


class PlacesAPIView(APIView):
    """
    Base class for the public endpoints that proxy the configured geo provider.

    The provider is resolved per request through `get_provider()`, so the `GEO_PROVIDER` setting
    decides which upstream answers without any view knowing which one it is.
    Each view uses the provider as a context manager so its HTTP session is closed once the
    request is answered.
    """
    permission_classes = [AllowAny]
    query_serializer_class = None

    def get_query(self, request):
        serializer = self.query_serializer_class(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        return serializer.validated_data


class NearbySearchView(PlacesAPIView):
    """`GET /api/places/search-nearby/?lat&lng&radius&keyword&type`"""
    query_serializer_class = NearbySearchQuerySerializer

    def get(self, request):
        query = self.get_query(request)
        with get_provider() as provider:
            places = provider.search_nearby(
                query['lat'],
                query['lng'],
                query['radius'],
                query['keyword'],
                query.get('type'),
            )
        return Response(PlaceSerializer(places, many=True).data)


class PlaceDetailsView(PlacesAPIView):
    """`GET /api/places/details/{placeId}/`"""

    def get(self, request, place_id):
        with get_provider() as provider:
            place = provider.get_place_details(place_id)
        if place is None:
            raise NotFoundError('Place not found.')
        return Response(PlaceDetailSerializer(place).data)


class GeocodeView(PlacesAPIView):
    """`GET /api/places/geocode/?address`"""
    query_serializer_class = GeocodeQuerySerializer

    def get(self, request):
        address = self.get_query(request)['address']
        with get_provider() as provider:
            result = provider.geocode(address)
        if result is None:
            raise NotFoundError('Address not found.')
        return Response(GeocodeResultSerializer(result).data)


class ReverseGeocodeView(PlacesAPIView):
    """`GET /api/places/reverse-geocode/?lat&lng`"""
    query_serializer_class = CoordinatesQuerySerializer

    def get(self, request):
        query = self.get_query(request)
        with get_provider() as provider:
            result = provider.reverse_geocode(query['lat'], query['lng'])
        if result is None:
            raise NotFoundError('No address found for the given coordinates.')
        return Response(GeocodeResultSerializer(result).data)


class DistanceView(PlacesAPIView):
    """
    `GET /api/places/distance/?lat1&lng1&lat2&lng2`

    Computed locally with the Haversine formula; no provider or credential is involved.
    """
    query_serializer_class = DistanceQuerySerializer

    def get(self, request):
        query = self.get_query(request)
        distance = haversine_km(query['lat1'], query['lng1'], query['lat2'], query['lng2'])
        return Response({'distance': distance, 'unit': 'km'})


class PictureView(PlacesAPIView):
    """`GET /api/places/picture/?photoReference&maxWidth` -> `{url}`"""
    query_serializer_class = PictureQuerySerializer

    def get(self, request):
        query = self.get_query(request)
        with get_provider() as provider:
            url = provider.photo_url(query['photoReference'], query['maxWidth'])
        if url is None:
            raise ConfigurationError(
                'Photo URLs are not available: the provider has no photo service or its '
                'credential is not configured.'
            )
        return Response({'url': url})


class SuggestionsView(PlacesAPIView):
    """`GET /api/places/suggestions/?q&lat&lng`"""
    query_serializer_class = SuggestionsQuerySerializer

    def get(self, request):
        query = self.get_query(request)
        with get_provider() as provider:
            suggestions = provider.suggest(query['q'], query.get('lat'), query.get('lng'))
        return Response(SuggestionSerializer(suggestions, many=True).data)


class StaticMapView(PlacesAPIView):
    """`GET /api/places/static-map/?lat&lng&zoom&width&height` -> `{url}`"""
    query_serializer_class = StaticMapQuerySerializer

    def get(self, request):
        query = self.get_query(request)
        with get_provider() as provider:
            url = provider.static_map_url(
                query['lat'], query['lng'], query['zoom'], query['width'], query['height']
            )
        if url is None:
            raise ConfigurationError('Static maps are not available: the provider credential is '
                                     'not configured.')
        return Response({'url': url})
