import logging
import uuid
from urllib.parse import quote

from core.exceptions import ProviderError

from .base import GeoProvider, geocode_result, place_detail, place_summary, suggestion

logger = logging.getLogger(__name__)

MAPBOX_API_URL = 'https://api.mapbox.com'
GEOCODING_URL = f'{MAPBOX_API_URL}/geocoding/v5/mapbox.places'
SEARCH_URL = f'{MAPBOX_API_URL}/search/searchbox/v1'
SUGGESTION_LIMIT = 10


class MapboxProvider(GeoProvider):
    """
    Mapbox Search Box and Geocoding.

    Nearby search is a two-step flow: `suggest` returns candidate ids, then each candidate is
    fetched with `retrieve`. A candidate whose retrieval fails is logged and skipped instead of
    failing the whole search. Mapbox does not restrict suggestions by radius, so the great-circle
    distance is computed here and results beyond the radius are dropped. Mapbox has no place
    photo service, so `photo_url` always returns `None`.
    """
    name = 'mapbox'
    credential_setting = 'MAPBOX_ACCESS_TOKEN'

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # Groups suggest and retrieve calls into one billing session.
        self.session_token = str(uuid.uuid4())

    @property
    def language_code(self):
        return self.language.split('-')[0]

    def _get(self, url, allow_not_found=False, **params):
        params['access_token'] = self.require_credential()
        return self.request('GET', url, allow_not_found=allow_not_found, params=params)

    def _retrieve(self, mapbox_id, allow_not_found=False):
        data = self._get(
            f'{SEARCH_URL}/retrieve/{mapbox_id}',
            allow_not_found=allow_not_found,
            session_token=self.session_token,
            language=self.language_code,
        )
        features = (data or {}).get('features') or []
        return features[0] if features else None

    def search_nearby(self, lat, lng, radius_m, keyword, type_hint=None):
        data = self._get(
            f'{SEARCH_URL}/suggest',
            q=keyword,
            proximity=f'{lng},{lat}',
            limit=SUGGESTION_LIMIT,
            types=type_hint or 'poi',
            language=self.language_code,
            session_token=self.session_token,
        )

        places = []
        for candidate in data.get('suggestions', [])[:SUGGESTION_LIMIT]:
            try:
                feature = self._retrieve(candidate['mapbox_id'])
            except ProviderError:
                logger.warning("Skipping Mapbox suggestion %s: retrieve failed",
                               candidate.get('mapbox_id'))
                continue
            if feature is not None:
                places.append(self._summary(feature))
        return self.within_radius(lat, lng, radius_m, places)

    def get_place_details(self, place_id):
        feature = self._retrieve(place_id, allow_not_found=True)
        if feature is None:
            return None

        properties = feature.get('properties', {})
        metadata = properties.get('metadata', {})
        return place_detail(
            self._summary(feature),
            phone=metadata.get('phone') or properties.get('tel'),
            website=metadata.get('website') or properties.get('website'),
        )

    def geocode(self, address):
        data = self._get(
            f'{GEOCODING_URL}/{quote(address, safe="")}.json',
            country=self.region,
            language=self.language_code,
            limit=1,
        )
        return self._geocode_result(data)

    def reverse_geocode(self, lat, lng):
        data = self._get(
            f'{GEOCODING_URL}/{lng},{lat}.json',
            country=self.region,
            language=self.language_code,
            limit=1,
        )
        return self._geocode_result(data)

    def photo_url(self, reference, max_width=400):
        return None

    def static_map_url(self, lat, lng, zoom=15, width=400, height=300):
        if not self.credential:
            return None
        return (
            f'{MAPBOX_API_URL}/styles/v1/mapbox/streets-v11/static/'
            f'pin-s+ff0000({lng},{lat})/{lng},{lat},{zoom}/{width}x{height}'
            f'?access_token={self.credential}'
        )

    def suggest(self, query, lat=None, lng=None):
        params = {
            'q': query,
            'language': self.language_code,
            'limit': SUGGESTION_LIMIT,
            'types': 'poi,address',
            'session_token': self.session_token,
        }
        if lat is not None and lng is not None:
            params['proximity'] = f'{lng},{lat}'

        data = self._get(f'{SEARCH_URL}/suggest', **params)
        return [
            suggestion(
                item.get('mapbox_id'),
                item.get('name'),
                item.get('full_address') or item.get('name'),
                (item.get('poi_category_ids') or ['place'])[0],
            )
            for item in data.get('suggestions', [])
        ]

    def _summary(self, feature):
        lng, lat = _coordinates((feature.get('geometry') or {}).get('coordinates'))
        properties = feature.get('properties', {})
        category = properties.get('category')
        return place_summary(
            properties.get('mapbox_id'),
            properties.get('name') or properties.get('full_address'),
            properties.get('full_address') or properties.get('place_formatted'),
            lat,
            lng,
            types=[category] if category else [],
        )

    def _geocode_result(self, data):
        features = data.get('features') or []
        if not features:
            return None
        feature = features[0]
        lng, lat = _coordinates(
            feature.get('center') or (feature.get('geometry') or {}).get('coordinates')
        )
        if lat is None or lng is None:
            logger.warning("Mapbox geocoding feature %s has no coordinates", feature.get('id'))
            return None

        components = [
            {
                'long_name': component.get('text'),
                'short_name': component.get('short_code') or component.get('text'),
                'types': [component.get('id', '').split('.')[0]],
            }
            for component in feature.get('context', [])
        ]
        return geocode_result(feature.get('place_name'), lat, lng, feature.get('id'), components)


def _coordinates(value):
    """Splits a GeoJSON `[lng, lat]` pair; anything shorter yields `(None, None)`."""
    if not value or len(value) < 2:
        return None, None
    return value[0], value[1]
