from django.urls import path

from .views import (
    DistanceView,
    GeocodeView,
    NearbySearchView,
    PictureView,
    PlaceDetailsView,
    ReverseGeocodeView,
    StaticMapView,
    SuggestionsView,
)

urlpatterns = [
    path('search-nearby/', NearbySearchView.as_view(), name='places-search-nearby'),
    path('details/<str:place_id>/', PlaceDetailsView.as_view(), name='places-details'),
    path('geocode/', GeocodeView.as_view(), name='places-geocode'),
    path('reverse-geocode/', ReverseGeocodeView.as_view(), name='places-reverse-geocode'),
    path('distance/', DistanceView.as_view(), name='places-distance'),
    path('picture/', PictureView.as_view(), name='places-picture'),
    path('suggestions/', SuggestionsView.as_view(), name='places-suggestions'),
    path('static-map/', StaticMapView.as_view(), name='places-static-map'),
]
