"""Service-layer error kinds.

Every failure that can cross the HTTP boundary is one of these. Each kind
carries the status code and client-facing message it maps to, so the API
layer translates by type rather than by inspecting message text.
"""

from fastapi import status


class ServiceError(Exception):
    """Base class for all handled service failures."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "An error occurred"
    headers: dict[str, str] | None = None

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationFailed(ServiceError):
    """Malformed or out-of-range request fields."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Validation failed"

    def __init__(self, message: str | None = None, violations: list | None = None):
        super().__init__(message)
        self.violations = violations or []


class DuplicateIdentity(ServiceError):
    """Username or email already registered."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "User already exists"


class InvalidCredentials(ServiceError):
    """Login failed. Never says whether the username exists."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid username or password"
    headers = {"WWW-Authenticate": "Bearer"}


class Unauthenticated(ServiceError):
    """No bearer token was presented."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authenticated"
    headers = {"WWW-Authenticate": "Bearer"}


class InvalidToken(ServiceError):
    """Bearer token failed verification."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid authentication credentials"
    headers = {"WWW-Authenticate": "Bearer"}


class MalformedToken(InvalidToken):
    """Token is not a decodable JWT or lacks required claims."""


class BadSignature(InvalidToken):
    """Token signature does not match the server key."""


class Expired(InvalidToken):
    """Token is past its expiry."""

    default_message = "Token has expired"


class UnknownPrincipal(ServiceError):
    """A valid token names a user that no longer exists."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "User not found"


class NotFoundOrForbidden(ServiceError):
    """Task is absent or owned by someone else; the two are indistinguishable."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Task not found or access denied"


class InternalFailure(ServiceError):
    """Unexpected failure. Detail is logged server-side only."""
