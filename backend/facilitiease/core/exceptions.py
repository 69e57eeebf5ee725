"""
Domain errors surfaced to API callers.

Each error carries a stable ``code`` and the HTTP status the boundary maps it
to. Services raise these; the handlers in ``error_handlers`` render them.
"""


class DomainError(Exception):
    code = "ERROR"
    status_code = 400
    default_message = "Request failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class AlreadyExists(DomainError):
    code = "ALREADY_EXISTS"
    status_code = 400
    default_message = "User already exists"


class InvalidCredentials(DomainError):
    code = "INVALID_CREDENTIALS"
    status_code = 401
    default_message = "Invalid credentials"


class Unauthenticated(DomainError):
    code = "UNAUTHENTICATED"
    status_code = 401
    default_message = "Authentication required"


class Forbidden(DomainError):
    code = "FORBIDDEN"
    status_code = 403
    default_message = "Not allowed"


class NotFound(DomainError):
    code = "NOT_FOUND"
    status_code = 404
    default_message = "Not found"


class InvalidUpload(DomainError):
    code = "INVALID_UPLOAD"
    status_code = 400
    default_message = "Invalid file"


class Internal(DomainError):
    code = "INTERNAL"
    status_code = 500
    default_message = "Internal server error"
