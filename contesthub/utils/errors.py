"""
Service error types.

Every failure a service can report maps to exactly one of these classes;
the HTTP layer turns them into an error response carrying ``status_code``.
"""


class ServiceError(Exception):
    """Base class for errors surfaced to API clients"""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(ServiceError):
    status_code = 401
    default_message = "Unauthorized"


class InvalidCredential(ServiceError):
    status_code = 401
    default_message = "Invalid token"


class Forbidden(ServiceError):
    status_code = 403
    default_message = "Not allowed"


class InvalidInput(ServiceError):
    status_code = 400
    default_message = "Invalid input"


class NotFound(ServiceError):
    status_code = 404
    default_message = "Not found"


class Conflict(ServiceError):
    status_code = 409
    default_message = "Conflict"


class QuotaExceeded(ServiceError):
    status_code = 403
    default_message = "Contest limit reached"


class Unavailable(ServiceError):
    status_code = 503
    default_message = "Service unavailable"
