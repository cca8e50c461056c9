"""Domain errors raised by the user services and translated to HTTP status codes by the routes."""


class UserServiceError(Exception):
    """Base class for user management errors. Carries a client-safe message."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.message = message
        self.cause = cause
        super().__init__(message)


class NotFoundError(UserServiceError):
    """The requested user does not exist."""

    def __init__(self, message: str = "User not found", cause: Exception | None = None) -> None:
        super().__init__(message, cause)


class ConflictError(UserServiceError):
    """Another live user already has this email."""

    def __init__(self, message: str = "Email already exists", cause: Exception | None = None) -> None:
        super().__init__(message, cause)


class InvalidCredentialsError(UserServiceError):
    """
    Login failed. The message is identical for unknown email and wrong password
    so callers cannot tell which accounts exist.
    """

    def __init__(self, message: str = "Invalid credentials.", cause: Exception | None = None) -> None:
        super().__init__(message, cause)


class ValidationError(UserServiceError):
    """Input is malformed (e.g. password outside the allowed length)."""


class StorageError(UserServiceError):
    """Unexpected internal failure while hashing or writing to the store."""
