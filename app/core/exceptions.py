"""Domain errors for the application lifecycle.

Every error carries the HTTP status the API boundary maps it to, so routes
never translate errors by matching on message strings.
"""

from fastapi import status


class ApplicationError(Exception):
    """Base class for expected, typed lifecycle failures."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    default_detail: str = "Application request failed"

    def __init__(self, detail: str = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class Unauthenticated(ApplicationError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Authentication required"


class InvalidInput(ApplicationError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid request"


class Conflict(ApplicationError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "You have already applied for this job"


class Forbidden(ApplicationError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Unauthorized"


class NotFound(ApplicationError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class DuplicateApplication(Exception):
    """Raised by a store when the (job, applicant) uniqueness constraint rejects a write."""
