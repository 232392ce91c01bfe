# ticketdesk/core/errors.py


class AppError(Exception):
    status_code = 400
    code = "error"
    message = "Request failed"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class ValidationError(AppError):
    status_code = 422
    code = "validation_error"
    message = "Invalid input"


class DuplicateEmail(AppError):
    status_code = 409
    code = "duplicate_email"
    message = "Email already registered"


class InvalidCredentials(AppError):
    # Same answer for unknown email and wrong password
    status_code = 401
    code = "invalid_credentials"
    message = "Invalid email or password"


class Unauthenticated(AppError):
    status_code = 401
    code = "unauthenticated"
    message = "Not authenticated"


class NotFound(AppError):
    # Also raised for resources owned by someone else
    status_code = 404
    code = "not_found"
    message = "Not found"


class AlreadyClosed(AppError):
    status_code = 409
    code = "already_closed"
    message = "Ticket is already closed"


class DataCorruption(AppError):
    status_code = 500
    code = "internal_error"
    message = "Internal server error"


__all__ = [
    "AppError",
    "ValidationError",
    "DuplicateEmail",
    "InvalidCredentials",
    "Unauthenticated",
    "NotFound",
    "AlreadyClosed",
    "DataCorruption",
]
