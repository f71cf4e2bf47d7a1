from django.apps import AppConfig


class EstablishmentsAppConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'establishments_app'
    verbose_name = 'Establishments'
