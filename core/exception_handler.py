import logging

from django.core.exceptions import (
    ObjectDoesNotExist,
    PermissionDenied as DjangoPermissionDenied,
    RequestDataTooBig,
    ValidationError as DjangoValidationError,
)
from django.db import IntegrityError
from django.http import Http404
from rest_framework import exceptions
from rest_framework.response import Response
from rest_framework.views import set_rollback

from .exceptions import (
    ConflictError,
    DomainError,
    ForbiddenError,
    InternalError,
    NotFoundError,
    PayloadTooLargeError,
    UnauthorizedError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def error_payload(error):
    """Builds the uniform error body for a `DomainError`."""
    payload = {'error': error.category, 'message': error.message}
    if error.details is not None:
        payload['details'] = error.details
    return payload


def _detail_message(exc, default):
    detail = getattr(exc, 'detail', None)
    if isinstance(detail, str):
        return str(detail)
    return default


def to_domain_error(exc):
    """
    Translates any exception raised while handling a request into a `DomainError`.

    Domain errors pass through unchanged. DRF and Django exceptions are mapped onto the same
    taxonomy so that every failure the API reports has the same shape. Storage-level uniqueness
    violations that escaped the services become a `ConflictError`. Anything else is an
    `InternalError`; the original exception is logged with its traceback and never sent to the
    client.
    """
    if isinstance(exc, DomainError):
        return exc

    if isinstance(exc, exceptions.ValidationError):
        return ValidationError(details=exc.detail)

    if isinstance(exc, exceptions.ParseError):
        return ValidationError(_detail_message(exc, ValidationError.default_message))

    if isinstance(exc, DjangoValidationError):
        return ValidationError(details=exc.messages)

    if isinstance(exc, (exceptions.NotAuthenticated, exceptions.AuthenticationFailed)):
        # DRF downgrades these to 403 when no authenticator offers a WWW-Authenticate header.
        if exc.status_code == 403:
            return ForbiddenError(_detail_message(exc, ForbiddenError.default_message))
        return UnauthorizedError(_detail_message(exc, UnauthorizedError.default_message))

    if isinstance(exc, (exceptions.PermissionDenied, DjangoPermissionDenied)):
        return ForbiddenError(_detail_message(exc, ForbiddenError.default_message))

    if isinstance(exc, (exceptions.NotFound, Http404, ObjectDoesNotExist)):
        return NotFoundError()

    if isinstance(exc, RequestDataTooBig):
        return PayloadTooLargeError()

    if isinstance(exc, IntegrityError):
        logger.warning("Unhandled integrity error translated to conflict: %s", exc)
        return ConflictError()

    return None


def api_exception_handler(exc, context):
    """
    DRF exception handler installed through `REST_FRAMEWORK['EXCEPTION_HANDLER']`.

    Returns a response with the body `{error, message, details?}` for every exception. Generic
    DRF exceptions outside the taxonomy (405, 406, 415, 429) keep their own status code and use
    their reason phrase as the category.
    """
    error = to_domain_error(exc)
    headers = {}

    if error is None and isinstance(exc, exceptions.APIException):
        set_rollback()
        if getattr(exc, 'wait', None):
            headers['Retry-After'] = '%d' % exc.wait
        body = {
            'error': exc.default_code.replace('_', ' ').title(),
            'message': _detail_message(exc, str(exc.default_detail)),
        }
        return Response(body, status=exc.status_code, headers=headers)

    if error is None:
        view = context.get('view')
        logger.exception(
            "Unhandled exception in %s",
            view.__class__.__name__ if view is not None else 'unknown view',
        )
        error = InternalError()

    if isinstance(error, UnauthorizedError) and getattr(exc, 'auth_header', None):
        headers['WWW-Authenticate'] = exc.auth_header

    if error.status_code >= 500 and not isinstance(error, InternalError):
        logger.error("%s: %s", error.category, error.message)

    set_rollback()
    return Response(error_payload(error), status=error.status_code, headers=headers)
