from django.apps import AppConfig


class PlacesAppConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'places_app'
    verbose_name = 'Places'
