import logging
from urllib.parse import urlencode

from core.exceptions import ProviderError

from .base import GeoProvider, geocode_result, place_detail, place_summary, suggestion

logger = logging.getLogger(__name__)

MAPS_API_URL = 'https://maps.googleapis.com/maps/api'
GEOCODING_URL = f'{MAPS_API_URL}/geocode/json'
STATIC_MAP_URL = f'{MAPS_API_URL}/staticmap'

DETAIL_FIELDS = (
    'place_id,name,formatted_address,geometry,rating,user_ratings_total,formatted_phone_number,'
    'website,opening_hours,photos,types,price_level'
)
NO_RESULT_STATUSES = ('ZERO_RESULTS', 'NOT_FOUND')


class GoogleMapsMixin:
    """
    Google Maps Platform features shared by both Google providers: the Geocoding API, the Static
    Maps API and the `status` field convention of the JSON web services.
    """
    name = 'google'
    credential_setting = 'GOOGLE_MAPS_API_KEY'

    def get_json(self, url, params):
        """
        Calls a Google JSON web service and checks its `status` field.

        Returns:
            dict | None: The response body when the status is OK, `None` for ZERO_RESULTS and
            NOT_FOUND.

        Raises:
            ProviderError: For every other status (REQUEST_DENIED, OVER_QUERY_LIMIT,
                INVALID_REQUEST, UNKNOWN_ERROR, ...).
        """
        params = dict(params, key=self.require_credential())
        data = self.request('GET', url, params=params)
        status = data.get('status')
        if status == 'OK':
            return data
        if status in NO_RESULT_STATUSES:
            return None
        logger.error("Google answered with status %s: %s", status, data.get('error_message', ''))
        raise ProviderError(f"The geo data provider answered with status {status}.")

    def geocode(self, address):
        data = self.get_json(GEOCODING_URL, {
            'address': address,
            'language': self.language,
            'region': self.region,
        })
        if not data or not data.get('results'):
            return None
        return self._geocode_result(data['results'][0])

    def reverse_geocode(self, lat, lng):
        data = self.get_json(GEOCODING_URL, {
            'latlng': f'{lat},{lng}',
            'language': self.language,
            'region': self.region,
        })
        if not data or not data.get('results'):
            return None
        return self._geocode_result(data['results'][0])

    def static_map_url(self, lat, lng, zoom=15, width=400, height=300):
        if not self.credential:
            return None
        query = urlencode({
            'center': f'{lat},{lng}',
            'zoom': zoom,
            'size': f'{width}x{height}',
            'markers': f'color:red|{lat},{lng}',
            'key': self.credential,
        })
        return f'{STATIC_MAP_URL}?{query}'

    def _geocode_result(self, result):
        location = result.get('geometry', {}).get('location', {})
        components = [
            {
                'long_name': component.get('long_name'),
                'short_name': component.get('short_name'),
                'types': component.get('types', []),
            }
            for component in result.get('address_components', [])
        ]
        return geocode_result(
            result.get('formatted_address'),
            location.get('lat'),
            location.get('lng'),
            result.get('place_id'),
            components,
        )


class GoogleLegacyProvider(GoogleMapsMixin, GeoProvider):
    """
    Google Places through the legacy JSON web services (Nearby Search, Place Details, Place
    Photos and Place Autocomplete). The radius is applied by Google.
    """
    name = 'google'

    def search_nearby(self, lat, lng, radius_m, keyword, type_hint=None):
        params = {
            'location': f'{lat},{lng}',
            'radius': radius_m,
            'keyword': keyword,
            'language': self.language,
        }
        if type_hint:
            params['type'] = type_hint

        data = self.get_json(f'{MAPS_API_URL}/place/nearbysearch/json', params)
        if not data:
            return []
        return [self._summary(place, place.get('vicinity')) for place in data.get('results', [])]

    def get_place_details(self, place_id):
        data = self.get_json(f'{MAPS_API_URL}/place/details/json', {
            'place_id': place_id,
            'fields': DETAIL_FIELDS,
            'language': self.language,
        })
        if not data or not data.get('result'):
            return None

        place = data['result']
        hours = place.get('opening_hours')
        opening_hours = None
        if hours:
            opening_hours = {
                'open_now': hours.get('open_now'),
                'weekday_text': hours.get('weekday_text', []),
            }
        return place_detail(
            self._summary(place, place.get('formatted_address')),
            phone=place.get('formatted_phone_number'),
            website=place.get('website'),
            opening_hours=opening_hours,
        )

    def photo_url(self, reference, max_width=400):
        if not self.credential or not reference:
            return None
        query = urlencode({
            'maxwidth': max_width,
            'photoreference': reference,
            'key': self.credential,
        })
        return f'{MAPS_API_URL}/place/photo?{query}'

    def suggest(self, query, lat=None, lng=None):
        params = {'input': query, 'language': self.language, 'components': f'country:{self.region}'}
        if lat is not None and lng is not None:
            params['location'] = f'{lat},{lng}'
            params['radius'] = 50000

        data = self.get_json(f'{MAPS_API_URL}/place/autocomplete/json', params)
        if not data:
            return []
        return [
            suggestion(
                prediction.get('place_id'),
                prediction.get('structured_formatting', {}).get('main_text')
                or prediction.get('description'),
                prediction.get('description'),
                (prediction.get('types') or ['place'])[0],
            )
            for prediction in data.get('predictions', [])
        ]

    def _summary(self, place, address):
        location = place.get('geometry', {}).get('location', {})
        photos = [
            {
                'reference': photo.get('photo_reference'),
                'width': photo.get('width'),
                'height': photo.get('height'),
            }
            for photo in place.get('photos', [])
        ]
        return place_summary(
            place.get('place_id'),
            place.get('name'),
            address,
            location.get('lat'),
            location.get('lng'),
            rating=place.get('rating'),
            rating_count=place.get('user_ratings_total'),
            types=place.get('types'),
            price_level=place.get('price_level'),
            photos=photos,
        )
