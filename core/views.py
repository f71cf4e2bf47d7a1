from django.http import JsonResponse
from django.utils import timezone
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from . import __version__


class HealthCheckView(APIView):
    """
    Public liveness probe.

    Endpoint:
        GET /api/health/
    """
    permission_classes = [AllowAny]
    authentication_classes = []

    def get(self, request, format=None):
        data = {
            'status': 'ok',
            'timestamp': timezone.now().isoformat(),
            'version': __version__,
        }
        return Response(data, status=status.HTTP_200_OK)


def route_not_found(request, exception=None):
    """Answers unknown routes with the uniform error body instead of Django's HTML page."""
    return JsonResponse(
        {'error': 'Not Found', 'message': 'Route not found.'},
        status=status.HTTP_404_NOT_FOUND,
    )
