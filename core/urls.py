from django.contrib import admin
from django.urls import include, path

from .views import HealthCheckView

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/health/', HealthCheckView.as_view(), name='health'),
    path('api/users/', include('user_auth_app.api.urls')),
    path('api/', include('establishments_app.api.urls')),
    path('api/', include('reviews_app.api.urls')),
    path('api/places/', include('places_app.api.urls')),
]

handler404 = 'core.views.route_not_found'
