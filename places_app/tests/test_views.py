from unittest.mock import MagicMock, patch

from django.test import override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from core.exceptions import ProviderError

PLACE = {
    'place_id': 'ChIJ123',
    'name': 'Farmácia Central',
    'address': 'Rua Augusta, 100',
    'location': {'lat': -23.55, 'lng': -46.65},
    'rating': 4.3,
    'rating_count': 87,
    'types': ['pharmacy'],
    'price_level': None,
    'photos': [{'reference': 'ref-1', 'width': 800, 'height': 600}],
    'distance_km': None,
}


class PlacesViewTests(APITestCase):
    """
    Tests for the `/api/places/` endpoints with the provider replaced by a mock, so no request
    leaves the test process.
    """

    def setUp(self):
        self.provider = MagicMock()
        self.provider.__enter__.return_value = self.provider
        patcher = patch('places_app.api.views.get_provider', return_value=self.provider)
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_search_nearby_renames_fields(self):
        self.provider.search_nearby.return_value = [PLACE]
        response = self.client.get(reverse('places-search-nearby'), {
            'lat': -23.55, 'lng': -46.63, 'keyword': 'farmácia',
        })

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.provider.search_nearby.assert_called_once_with(-23.55, -46.63, 1500, 'farmácia', None)
        place = response.data[0]
        self.assertEqual(place['placeId'], 'ChIJ123')
        self.assertEqual(place['userRatingsTotal'], 87)
        self.assertEqual(place['photos'][0]['photoReference'], 'ref-1')
        self.assertIsNone(place['priceLevel'])
        self.provider.__exit__.assert_called_once()

    def test_search_nearby_validates_query(self):
        response = self.client.get(reverse('places-search-nearby'), {
            'lat': 100, 'lng': -46.63, 'keyword': 'x', 'radius': 60000,
        })

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        for field in ('lat', 'keyword', 'radius'):
            self.assertIn(field, response.data['details'])
        self.provider.search_nearby.assert_not_called()

    def test_details(self):
        self.provider.get_place_details.return_value = dict(
            PLACE,
            phone='(11) 5555-0000',
            website=None,
            opening_hours={'open_now': False, 'weekday_text': []},
            accessibility={'entrance': True, 'restroom': None, 'seating': None, 'parking': False},
        )
        response = self.client.get(reverse('places-details', kwargs={'place_id': 'ChIJ123'}))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['openingHours'], {'openNow': False, 'weekdayText': []})
        self.assertTrue(response.data['accessibility']['entrance'])

    def test_unknown_place_is_not_found(self):
        self.provider.get_place_details.return_value = None
        response = self.client.get(reverse('places-details', kwargs={'place_id': 'nope'}))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['error'], 'Not Found')

    def test_geocode(self):
        self.provider.geocode.return_value = {
            'formatted_address': 'Av. Paulista, 1000',
            'location': {'lat': -23.5646, 'lng': -46.6527},
            'place_id': 'geo-1',
            'address_components': [{'long_name': 'São Paulo', 'short_name': 'SP',
                                    'types': ['locality']}],
        }
        response = self.client.get(reverse('places-geocode'), {'address': 'Av. Paulista, 1000'})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['formattedAddress'], 'Av. Paulista, 1000')
        self.assertEqual(response.data['addressComponents'][0]['shortName'], 'SP')

    def test_reverse_geocode_without_match_is_not_found(self):
        self.provider.reverse_geocode.return_value = None
        response = self.client.get(reverse('places-reverse-geocode'), {'lat': 0, 'lng': 0})

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_provider_failure_is_a_provider_error(self):
        self.provider.geocode.side_effect = ProviderError()
        response = self.client.get(reverse('places-geocode'), {'address': 'Av. Paulista, 1000'})

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data['error'], 'Provider Error')
        self.provider.__exit__.assert_called_once()

    def test_distance(self):
        response = self.client.get(reverse('places-distance'), {
            'lat1': -23.5505, 'lng1': -46.6333, 'lat2': -23.5618, 'lng2': -46.6565,
        })

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {'distance': 2.68, 'unit': 'km'})

    def test_picture(self):
        self.provider.photo_url.return_value = 'https://example.com/photo.jpg'
        response = self.client.get(reverse('places-picture'), {'photoReference': 'ref-1'})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {'url': 'https://example.com/photo.jpg'})
        self.provider.photo_url.assert_called_once_with('ref-1', 400)

    def test_picture_unavailable_is_a_configuration_error(self):
        self.provider.photo_url.return_value = None
        response = self.client.get(reverse('places-picture'), {'photoReference': 'ref-1'})

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data['error'], 'Configuration Error')

    def test_suggestions(self):
        self.provider.suggest.return_value = [
            {'id': 's1', 'name': 'Padaria Real', 'full_text': 'Padaria Real, SP',
             'category': 'bakery'},
        ]
        response = self.client.get(reverse('places-suggestions'), {'q': 'padaria'})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data[0]['fullText'], 'Padaria Real, SP')
        self.provider.suggest.assert_called_once_with('padaria', None, None)

    def test_static_map(self):
        self.provider.static_map_url.return_value = 'https://example.com/map.png'
        response = self.client.get(reverse('places-static-map'), {'lat': -23.55, 'lng': -46.63})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.provider.static_map_url.assert_called_once_with(-23.55, -46.63, 15, 400, 300)


class PlacesConfigurationTests(APITestCase):
    """Missing credentials reach the client as a configuration error, without a network call."""

    @override_settings(GEO_PROVIDER='google', GOOGLE_MAPS_API_KEY=None)
    def test_missing_google_key(self):
        with patch('requests.Session.request') as request:
            response = self.client.get(reverse('places-geocode'), {'address': 'Av. Paulista, 1000'})

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data['error'], 'Configuration Error')
        request.assert_not_called()
