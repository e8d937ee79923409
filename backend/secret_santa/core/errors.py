"""
Domain errors raised by the assignment service.

Each error carries the machine-readable `kind` and the HTTP status the API
answers with, so routers never need to map them by hand.
"""
from typing import Optional

from fastapi import status


class SantaError(Exception):
    """Base class for all errors surfaced to API callers."""
    kind: str = "internal_error"
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "An unexpected error occurred"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(SantaError):
    """A required field is missing or blank."""
    kind = "validation_error"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class DuplicateRegistration(SantaError):
    """An assignment already exists for this email."""
    kind = "duplicate_registration"
    status_code = status.HTTP_409_CONFLICT
    default_message = "This email has already been assigned a person"


class PoolExhausted(SantaError):
    """No candidate is left to assign (possibly after self-exclusion)."""
    kind = "pool_exhausted"
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "No names available for assignment"


class InvalidCredentials(SantaError):
    """Unknown email or wrong password. The two are deliberately not told apart."""
    kind = "invalid_credentials"
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid email or password"


class RateLimited(SantaError):
    """Too many requests from one client."""
    kind = "rate_limited"
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    default_message = "Too many requests. Please try again later."


class AssignmentFailed(SantaError):
    """The assignment transaction aborted; nothing was persisted."""
    kind = "assignment_failed"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Failed to create assignment"


class StoreUnavailable(SantaError):
    """The database could not be reached."""
    kind = "store_unavailable"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_message = "Service temporarily unavailable"
