"""FastAPI dependencies wiring the auth service to the request."""
import json
from functools import partial
from typing import Annotated, Any, Type, TypeVar

from fastapi import BackgroundTasks, Depends, Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.database import get_async_session
from app.repositories.user import UserRepository
from app.schemas.auth import Credentials, LogoutRequest
from app.services.auth import AuthService
from app.services.tasks import dispatch_welcome_notification

SchemaT = TypeVar("SchemaT", Credentials, LogoutRequest)

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def get_user_repository(
    session: Annotated[AsyncSession, Depends(get_async_session)],
) -> UserRepository:
    return UserRepository(session)


def get_auth_service(
    users: Annotated[UserRepository, Depends(get_user_repository)],
    background_tasks: BackgroundTasks,
) -> AuthService:
    """Dependency to build the auth service for one request.

    The welcome notification is handed to a background task, so enqueueing
    it happens after the response is produced and cannot delay or fail the
    registration.

    Usage:
        @router.post("/login")
        async def login(
            auth: Annotated[AuthService, Depends(get_auth_service)]
        ):
            ...
    """
    return AuthService(
        users,
        on_registered=partial(background_tasks.add_task, dispatch_welcome_notification),
    )


async def _read_payload(request: Request) -> Any:
    """Body as a mapping: HTML form fields or a JSON document.

    An empty body reads as no fields at all.
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        return dict(form)

    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        return json.loads(raw)
    except ValueError as exc:
        raise RequestValidationError(
            [{"type": "json_invalid", "loc": ("body",), "msg": str(exc), "input": {}}]
        )


def _body_parser(schema: Type[SchemaT]):
    async def parse(request: Request) -> SchemaT:
        try:
            return schema.model_validate(await _read_payload(request))
        except ValidationError as exc:
            raise RequestValidationError(exc.errors(include_url=False))

    return parse


get_credentials = _body_parser(Credentials)
get_logout_request = _body_parser(LogoutRequest)
