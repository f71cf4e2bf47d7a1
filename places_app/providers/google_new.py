from urllib.parse import urlencode

from .base import GeoProvider, place_detail, place_summary, suggestion
from .google import GoogleMapsMixin

PLACES_API_URL = 'https://places.googleapis.com/v1'

SUMMARY_FIELDS = (
    'id',
    'displayName',
    'formattedAddress',
    'location',
    'rating',
    'userRatingCount',
    'types',
    'priceLevel',
    'photos',
)
DETAIL_FIELDS = SUMMARY_FIELDS + (
    'nationalPhoneNumber',
    'websiteUri',
    'regularOpeningHours',
    'accessibilityOptions',
)

PRICE_LEVELS = {
    'PRICE_LEVEL_FREE': 0,
    'PRICE_LEVEL_INEXPENSIVE': 1,
    'PRICE_LEVEL_MODERATE': 2,
    'PRICE_LEVEL_EXPENSIVE': 3,
    'PRICE_LEVEL_VERY_EXPENSIVE': 4,
}


class GooglePlacesNewProvider(GoogleMapsMixin, GeoProvider):
    """
    Google Places API (New).

    Requests name the response fields they need through the `X-Goog-FieldMask` header. Place
    details include the wheelchair accessibility options, which the legacy API does not expose.
    Geocoding and static maps still go through the Maps JSON services of `GoogleMapsMixin`.
    Text search is biased towards the search circle but not limited to it, so results are
    filtered by great-circle distance and carry `distance_km`.
    """
    name = 'google_new'

    def _headers(self, fields):
        return {
            'X-Goog-Api-Key': self.require_credential(),
            'X-Goog-FieldMask': ','.join(fields),
        }

    def search_nearby(self, lat, lng, radius_m, keyword, type_hint=None):
        body = {
            'textQuery': keyword,
            'languageCode': self.language,
            'regionCode': self.region,
            'locationBias': {
                'circle': {
                    'center': {'latitude': lat, 'longitude': lng},
                    'radius': float(radius_m),
                },
            },
        }
        if type_hint:
            body['includedType'] = type_hint

        headers = self._headers(['places.' + field for field in SUMMARY_FIELDS])
        data = self.request('POST', f'{PLACES_API_URL}/places:searchText', json=body, headers=headers)
        # locationBias only ranks results, so the radius is enforced here.
        places = [self._summary(place) for place in data.get('places', [])]
        return self.within_radius(lat, lng, radius_m, places)

    def get_place_details(self, place_id):
        data = self.request(
            'GET',
            f'{PLACES_API_URL}/places/{place_id}',
            allow_not_found=True,
            params={'languageCode': self.language, 'regionCode': self.region},
            headers=self._headers(DETAIL_FIELDS),
        )
        if not data:
            return None

        hours = data.get('regularOpeningHours')
        opening_hours = None
        if hours:
            opening_hours = {
                'open_now': hours.get('openNow'),
                'weekday_text': hours.get('weekdayDescriptions', []),
            }

        options = data.get('accessibilityOptions')
        accessibility = None
        if options is not None:
            accessibility = {
                'entrance': options.get('wheelchairAccessibleEntrance'),
                'restroom': options.get('wheelchairAccessibleRestroom'),
                'seating': options.get('wheelchairAccessibleSeating'),
                'parking': options.get('wheelchairAccessibleParking'),
            }

        return place_detail(
            self._summary(data),
            phone=data.get('nationalPhoneNumber'),
            website=data.get('websiteUri'),
            opening_hours=opening_hours,
            accessibility=accessibility,
        )

    def photo_url(self, reference, max_width=400):
        # References are photo resource names: places/{place_id}/photos/{photo_id}
        if not self.credential or not reference:
            return None
        query = urlencode({'maxWidthPx': max_width, 'key': self.credential})
        return f'{PLACES_API_URL}/{reference}/media?{query}'

    def suggest(self, query, lat=None, lng=None):
        body = {'input': query, 'languageCode': self.language, 'regionCode': self.region}
        if lat is not None and lng is not None:
            body['locationBias'] = {
                'circle': {'center': {'latitude': lat, 'longitude': lng}, 'radius': 50000.0},
            }

        headers = {'X-Goog-Api-Key': self.require_credential()}
        data = self.request('POST', f'{PLACES_API_URL}/places:autocomplete', json=body,
                            headers=headers)

        results = []
        for item in data.get('suggestions', []):
            prediction = item.get('placePrediction')
            if not prediction:
                continue
            full_text = prediction.get('text', {}).get('text')
            main_text = prediction.get('structuredFormat', {}).get('mainText', {}).get('text')
            results.append(suggestion(
                prediction.get('placeId'),
                main_text or full_text,
                full_text,
                (prediction.get('types') or ['place'])[0],
            ))
        return results

    def _summary(self, place):
        location = place.get('location', {})
        photos = [
            {
                'reference': photo.get('name'),
                'width': photo.get('widthPx'),
                'height': photo.get('heightPx'),
            }
            for photo in place.get('photos', [])
        ]
        return place_summary(
            place.get('id'),
            place.get('displayName', {}).get('text'),
            place.get('formattedAddress'),
            location.get('latitude'),
            location.get('longitude'),
            rating=place.get('rating'),
            rating_count=place.get('userRatingCount'),
            types=place.get('types'),
            price_level=PRICE_LEVELS.get(place.get('priceLevel')),
            photos=photos,
        )
