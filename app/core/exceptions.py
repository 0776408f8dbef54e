"""Domain errors raised by the auth state machine.

Each error carries the HTTP status and the client-facing message it maps to;
the FastAPI exception handler in app.main turns them into the response
envelope.
"""
from fastapi import status


class AuthError(Exception):
    """Base class for expected, client-visible auth failures."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    message: str = "Bad request"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationFailed(AuthError):
    """A required field is missing or empty."""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "Please fill out all the fields"


class UserAlreadyExists(AuthError):
    status_code = status.HTTP_409_CONFLICT
    message = "User already exists. Please login"


class UserNotFound(AuthError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "User not found"


class SessionAlreadyActive(AuthError):
    """Login attempted while the user already has an active session.

    Reported as 400, not 409, to match the existing client contract.
    """

    status_code = status.HTTP_400_BAD_REQUEST
    message = "ID already logged in from another device"


class InvalidCredentials(AuthError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "Unauthorized"
