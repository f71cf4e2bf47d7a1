import logging

import requests
from django.conf import settings

from core.exceptions import ConfigurationError, ProviderError

from ..geo import haversine_km

logger = logging.getLogger(__name__)


class GeoProvider:
    """
    Common interface of every upstream mapping provider.

    Callers obtain an instance through `places_app.providers.get_provider()` and never branch on
    which provider is configured. Every method returns plain dicts with snake_case keys and the
    same shape for all providers; keys the upstream does not supply are present with `None` or an
    empty list.

    Failure policy:
        - A missing credential raises `ConfigurationError` before any network call.
        - An upstream "no match" returns `None` (single results) or `[]` (lists).
        - Network errors, timeouts, HTTP errors and upstream error statuses raise `ProviderError`.

    Attributes:
        name (str): The value of the `GEO_PROVIDER` setting that selects this provider.
        credential_setting (str): The Django setting holding the provider's credential.
    """
    name = None
    credential_setting = None

    def __init__(self, credential=None, timeout=5, language='pt-BR', region='br', session=None):
        self.credential = credential
        self.timeout = timeout
        self.language = language
        self.region = region
        self._owns_session = session is None
        self.session = session or requests.Session()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def close(self):
        """Closes the HTTP session if this provider created it. Injected sessions are left open."""
        if self._owns_session:
            self.session.close()

    @classmethod
    def from_settings(cls):
        return cls(
            credential=getattr(settings, cls.credential_setting, None),
            timeout=settings.GEO_PROVIDER_TIMEOUT,
            language=settings.GEO_PROVIDER_LANGUAGE,
            region=settings.GEO_PROVIDER_REGION,
        )

    def require_credential(self):
        if not self.credential:
            raise ConfigurationError(
                f"{self.credential_setting} is not configured for the '{self.name}' geo provider."
            )
        return self.credential

    def request(self, method, url, allow_not_found=False, **kwargs):
        """
        Sends one request to the upstream service and returns the decoded JSON body.

        Args:
            method (str): HTTP method.
            url (str): Absolute URL.
            allow_not_found (bool): Return `None` on HTTP 404 instead of raising.
            **kwargs: Passed on to `requests.Session.request` (params, json, headers).

        Raises:
            ProviderError: On timeout, connection failure, an HTTP error status or a body that
                is not JSON.
        """
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.Timeout:
            logger.error("%s request timed out after %ss", self.name, self.timeout)
            raise ProviderError('The geo data provider did not answer in time.')
        except requests.RequestException as exc:
            logger.error("%s request failed: %s", self.name, exc.__class__.__name__)
            raise ProviderError()

        if response.status_code == 404 and allow_not_found:
            return None
        if response.status_code >= 400:
            logger.error("%s answered with HTTP %s", self.name, response.status_code)
            raise ProviderError(f"The geo data provider answered with HTTP {response.status_code}.")

        try:
            return response.json()
        except ValueError:
            logger.error("%s returned a body that is not JSON", self.name)
            raise ProviderError('The geo data provider returned an invalid response.')

    def distance_km(self, lat1, lng1, lat2, lng2):
        return haversine_km(lat1, lng1, lat2, lng2)

    def within_radius(self, lat, lng, radius_m, places):
        """
        Attaches `distance_km` to each place summary and drops the ones beyond `radius_m`.

        Used by providers whose upstream search only ranks by proximity instead of restricting
        to a circle. Places without coordinates are dropped. A falsy radius keeps every place.
        """
        results = []
        for place in places:
            location = place['location']
            if location['lat'] is None or location['lng'] is None:
                logger.warning("%s place %s has no coordinates; skipped", self.name,
                               place.get('place_id'))
                continue
            distance = self.distance_km(lat, lng, location['lat'], location['lng'])
            if radius_m and distance > radius_m / 1000:
                continue
            place['distance_km'] = distance
            results.append(place)
        return results

    def search_nearby(self, lat, lng, radius_m, keyword, type_hint=None):
        """Places matching `keyword` around a point. Returns a list of place summaries."""
        raise NotImplementedError

    def get_place_details(self, place_id):
        """Full details of one place, or `None` when the provider does not know it."""
        raise NotImplementedError

    def geocode(self, address):
        raise NotImplementedError

    def reverse_geocode(self, lat, lng):
        raise NotImplementedError

    def photo_url(self, reference, max_width=400):
        raise NotImplementedError

    def static_map_url(self, lat, lng, zoom=15, width=400, height=300):
        raise NotImplementedError

    def suggest(self, query, lat=None, lng=None):
        raise NotImplementedError


def place_summary(place_id, name, address, lat, lng, rating=None, rating_count=None, types=None,
                  price_level=None, photos=None, distance_km=None):
    """Builds a place summary dict with every key present."""
    return {
        'place_id': place_id,
        'name': name,
        'address': address,
        'location': {'lat': lat, 'lng': lng},
        'rating': rating,
        'rating_count': rating_count,
        'types': types or [],
        'price_level': price_level,
        'photos': photos or [],
        'distance_km': distance_km,
    }


def place_detail(summary, phone=None, website=None, opening_hours=None, accessibility=None):
    """Extends a place summary with the detail-only keys."""
    detail = dict(summary)
    detail.update({
        'phone': phone,
        'website': website,
        'opening_hours': opening_hours,
        'accessibility': accessibility,
    })
    return detail


def geocode_result(formatted_address, lat, lng, place_id, address_components=None):
    return {
        'formatted_address': formatted_address,
        'location': {'lat': lat, 'lng': lng} if lat is not None else None,
        'place_id': place_id,
        'address_components': address_components or [],
    }


def suggestion(suggestion_id, name, full_text, category):
    return {'id': suggestion_id, 'name': name, 'full_text': full_text, 'category': category}
