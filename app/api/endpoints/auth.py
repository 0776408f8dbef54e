"""Authentication endpoints."""
from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from app.core.dependencies import get_auth_service, get_credentials, get_logout_request
from app.models.user import User
from app.schemas.auth import Credentials, LogoutRequest, UserPublic
from app.schemas.base import Envelope
from app.services.auth import AuthService

router = APIRouter(prefix="/user", tags=["Authentication"])


def _user_response(status_code: int, message: str, user: User) -> JSONResponse:
    data = UserPublic.model_validate(user).model_dump(by_alias=True)
    return JSONResponse(
        status_code=status_code,
        content=Envelope.success(status_code, message, data).model_dump(),
    )


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=Envelope)
async def register(
    body: Annotated[Credentials, Depends(get_credentials)],
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> JSONResponse:
    """Create a new, logged-out account.

    Request (JSON or HTML form):
        - userId: login identifier (surrounding whitespace is trimmed)
        - password: plain text password, stored only as a bcrypt hash

    Raises:
        400: missing field
        409: identifier already registered
    """
    user = await auth.register(body.user_id, body.password)
    return _user_response(status.HTTP_201_CREATED, "User registered successfully", user)


@router.post("/login", response_model=Envelope)
async def login(
    body: Annotated[Credentials, Depends(get_credentials)],
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> JSONResponse:
    """Open the user's single session.

    Raises:
        400: missing field, or the user is already logged in elsewhere
        404: unknown identifier
        403: wrong password
    """
    user = await auth.login(body.user_id, body.password)
    return _user_response(status.HTTP_200_OK, "Logged in successfully", user)


@router.post("/logout", response_model=Envelope)
async def logout(
    body: Annotated[LogoutRequest, Depends(get_logout_request)],
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> JSONResponse:
    """Close the user's session. Succeeds even if it was already closed."""
    user = await auth.logout(body.user_id)
    return _user_response(status.HTTP_200_OK, "Logged out successfully", user)
