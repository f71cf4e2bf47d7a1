class DomainError(Exception):
    """
    Base class for every error raised by the domain layer.

    Domain code (services, search, geo providers) raises these typed errors and never builds an
    HTTP response itself. The API exception handler in `core.exception_handler` is the only place
    that turns them into a status code and the uniform `{error, message, details?}` body.

    Attributes:
        status_code (int): The HTTP status the boundary layer responds with.
        category (str): A stable, machine-readable category sent as the `error` field.
        default_message (str): Used when the error is raised without a message.
    """
    status_code = 500
    category = 'Internal Server Error'
    default_message = 'An unexpected error occurred.'

    def __init__(self, message=None, details=None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class ValidationError(DomainError):
    """Malformed or out-of-range input."""
    status_code = 400
    category = 'Validation Error'
    default_message = 'Invalid data provided.'


class UnauthorizedError(DomainError):
    """Missing, invalid or expired credential, or an inactive account."""
    status_code = 401
    category = 'Unauthorized'
    default_message = 'Authentication credentials were not provided or are invalid.'


class ForbiddenError(DomainError):
    """The caller is authenticated but not allowed to perform the action."""
    status_code = 403
    category = 'Forbidden'
    default_message = 'You do not have permission to perform this action.'


class NotFoundError(DomainError):
    """A referenced entity does not exist."""
    status_code = 404
    category = 'Not Found'
    default_message = 'Resource not found.'


class ConflictError(DomainError):
    """A uniqueness rule was violated (duplicate place id, duplicate review, duplicate e-mail)."""
    status_code = 409
    category = 'Conflict'
    default_message = 'Resource already exists.'


class PayloadTooLargeError(DomainError):
    """The request body exceeds the configured size limit."""
    status_code = 413
    category = 'Payload Too Large'
    default_message = 'Request body is too large.'


class ConfigurationError(DomainError):
    """An upstream credential or setting is missing. This is an operator fault."""
    status_code = 500
    category = 'Configuration Error'
    default_message = 'The service is not configured correctly.'


class ProviderError(DomainError):
    """The upstream geo service failed, timed out or answered with an error status."""
    status_code = 500
    category = 'Provider Error'
    default_message = 'The geo data provider failed to answer.'


class InternalError(DomainError):
    """Anything unanticipated. Details are logged server-side only."""
    status_code = 500
    category = 'Internal Server Error'
    default_message = 'Internal server error.'
