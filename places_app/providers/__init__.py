from django.conf import settings

from core.exceptions import ConfigurationError

from .base import GeoProvider
from .google import GoogleLegacyProvider
from .google_new import GooglePlacesNewProvider
from .mapbox import MapboxProvider

PROVIDERS = {
    provider.name: provider
    for provider in (GoogleLegacyProvider, GooglePlacesNewProvider, MapboxProvider)
}


def get_provider(name=None):
    """
    Returns a provider instance for `name`, or for the `GEO_PROVIDER` setting when omitted.

    Raises:
        ConfigurationError: If the name does not match a known provider.
    """
    name = name or settings.GEO_PROVIDER
    try:
        provider_class = PROVIDERS[name]
    except KeyError:
        raise ConfigurationError(
            f"Unknown geo provider '{name}'. Choose one of: {', '.join(sorted(PROVIDERS))}."
        )
    return provider_class.from_settings()


__all__ = [
    'GeoProvider',
    'GoogleLegacyProvider',
    'GooglePlacesNewProvider',
    'MapboxProvider',
    'PROVIDERS',
    'get_provider',
]
