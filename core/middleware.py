from django.conf import settings
from django.http import JsonResponse

from .exception_handler import error_payload
from .exceptions import PayloadTooLargeError


class PayloadSizeLimitMiddleware:
    """
    Rejects requests whose declared body size exceeds `DATA_UPLOAD_MAX_MEMORY_SIZE`.

    DRF's parsers read the request stream directly, so Django's own size check only fires for
    form data. This middleware applies the same limit to every content type, based on the
    `Content-Length` header, before the body is read.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        limit = settings.DATA_UPLOAD_MAX_MEMORY_SIZE
        try:
            content_length = int(request.META.get('CONTENT_LENGTH') or 0)
        except ValueError:
            content_length = 0

        if limit is not None and content_length > limit:
            error = PayloadTooLargeError(
                "Request body exceeds the maximum allowed size of {} bytes.".format(limit)
            )
            return JsonResponse(error_payload(error), status=error.status_code)

        return self.get_response(request)
