"""
Error taxonomy for the Customer API.

Every failure a handler can surface is a ServiceError subclass carrying the
HTTP status it maps to. The application-level exception handler renders
4xx errors as plain text and 5xx errors as a generic JSON body.

Storage code raises StorageError instead; handlers translate it into an
InternalError with an endpoint-specific message.
"""


class ServiceError(Exception):
    """Base exception for errors returned to API callers."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(ServiceError):
    """Missing or malformed input."""

    status_code = 400


class MissingFieldError(ValidationError):
    """A required request field is absent or empty."""

    pass


class WeakPasswordError(ValidationError):
    """Password does not meet the minimum length."""

    def __init__(self, message: str = "Password is too short"):
        super().__init__(message)


class InvalidUserError(ValidationError):
    """No user is registered under the given email."""

    def __init__(self, message: str = "Invalid User"):
        super().__init__(message)


class InvalidPasswordError(ValidationError):
    """Password does not match the stored hash."""

    def __init__(self, message: str = "Invalid Password"):
        super().__init__(message)


class ConflictError(ServiceError):
    """Resource already exists."""

    status_code = 400


class DuplicateUserError(ConflictError):
    """A user with the same email is already registered."""

    def __init__(self, message: str = "User already exists"):
        super().__init__(message)


class AuthError(ServiceError):
    """Bearer token missing or rejected."""

    status_code = 401


class MissingTokenError(AuthError):
    """No bearer token on the request."""

    status_code = 401

    def __init__(self, message: str = "Authorization token is missing"):
        super().__init__(message)


class InvalidTokenError(AuthError):
    """Token is malformed, tampered with, or expired."""

    status_code = 403

    def __init__(self, message: str = "Invalid token"):
        super().__init__(message)


class NotFoundError(ServiceError):
    """Requested resource does not exist."""

    status_code = 404


class InternalError(ServiceError):
    """Unexpected persistence or crypto failure (never exposes details)."""

    status_code = 500

    def __init__(self, message: str = "Internal Server Error"):
        super().__init__(message)


class StorageError(Exception):
    """Base exception for storage layer failures."""

    pass
