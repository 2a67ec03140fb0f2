"""
Errors raised by the service layer.

Every service failure a caller can recover from is one of the four
subclasses below. The API layer maps them to HTTP responses through
``register_exception_handlers``; anything else is an internal error.
"""


class ServiceError(Exception):
    code: str = "error"
    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ServiceError):
    """Malformed input: empty required field, out-of-range coordinate, unknown enum value."""

    code = "bad_request"
    status_code = 400


class NotFoundError(ServiceError):
    code = "not_found"
    status_code = 404


class ForbiddenError(ServiceError):
    code = "forbidden"
    status_code = 403


class ConflictError(ServiceError):
    """Duplicate flag, already-reviewed request, or a status that moved underneath a request."""

    code = "conflict"
    status_code = 409
