"""Domain errors raised by the services.

Each error carries the HTTP status it maps to; ``checkin.main`` registers a
single handler that renders them as ``{"detail": ...}``.
"""

from fastapi import status


class CheckinError(Exception):
    """Base class for business rule violations."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class ValidationError(CheckinError):
    """Missing or malformed input."""

    status_code = status.HTTP_400_BAD_REQUEST


class AuthenticationError(CheckinError):
    """No valid teacher session or wrong credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED


class AuthorizationError(CheckinError):
    """The caregiver is not linked to the kid they tried to sign."""

    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(CheckinError):
    """Unknown contact number, family code, room or caregiver."""

    status_code = status.HTTP_404_NOT_FOUND


class InternalError(CheckinError):
    """Storage or rendering failure. The detail is logged, never returned."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
