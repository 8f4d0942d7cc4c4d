"""Shared exceptions for service layer operations."""


class AppError(Exception):
    """
    Base class for errors that map onto an HTTP outcome.

    Each subclass fixes the status code and a stable machine-readable code. The
    message is what the client sees in `detail`.
    """

    status_code: int = 500
    error_code: str = "internal_error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class UnauthenticatedError(AppError):
    """
    Raised when a request carries no usable bearer credential.

    Missing header, wrong scheme, bad signature and expiry all produce the same
    message so the response reveals nothing about why authentication failed.
    """

    status_code = 401
    error_code = "unauthorized"

    def __init__(self) -> None:
        super().__init__("Authentication required")


class InvalidCredentialsError(AppError):
    """Raised when an email/password pair does not match an account."""

    status_code = 401
    error_code = "invalid_credentials"

    def __init__(self) -> None:
        super().__init__("Invalid credentials")


class ForbiddenError(AppError):
    """Raised when an authenticated caller may not perform an action."""

    status_code = 403
    error_code = "forbidden"

    def __init__(self, message: str = "Access denied") -> None:
        super().__init__(message)


class NotFoundError(AppError):
    """
    Raised when a record does not exist or belongs to another user.

    Both cases use the same message to prevent ID enumeration.
    """

    status_code = 404
    error_code = "not_found"


class ValidationError(AppError):
    """Raised when input is well-formed but violates a domain rule."""

    status_code = 400
    error_code = "validation_error"


class ConflictError(AppError):
    """Raised when a value must be unique within the owner's records."""

    status_code = 409
    error_code = "conflict"


class InternalError(AppError):
    """
    Raised for failures the client cannot act on.

    The message is for server logs only; responses always say
    "Internal server error".
    """

    status_code = 500
    error_code = "internal_error"

    public_message = "Internal server error"
