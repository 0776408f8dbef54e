"""
Authentication state machine: register, login, logout.

A user is either logged out or logged in; a missing row means unregistered.
The login checks run in a fixed order (existence, active session, password)
and that order is part of the observable contract: an unknown user is a 404
even with a wrong password, and an already-active user is rejected before
the password is looked at.

Unknown user (404) and wrong password (403) are deliberately reported as
different errors, matching existing clients. This lets a caller probe which
identifiers are registered.
"""
import logging
from typing import Callable, Optional

from starlette.concurrency import run_in_threadpool

from app.core.exceptions import (
    InvalidCredentials,
    SessionAlreadyActive,
    UserAlreadyExists,
    UserNotFound,
    ValidationFailed,
)
from app.core.security import get_password_hash, verify_password
from app.models.user import User
from app.repositories.user import (
    DuplicateIdentifierError,
    RecordNotFoundError,
    UserRepository,
)

logger = logging.getLogger(__name__)


def _normalize_user_id(user_id: Optional[str]) -> str:
    return (user_id or "").strip()


class AuthService:
    """Register / login / logout over a UserRepository.

    on_registered is called with the new user's identifier after a
    successful registration. It is a best-effort hook: whatever it raises is
    logged and swallowed.
    """

    def __init__(
        self,
        users: UserRepository,
        on_registered: Optional[Callable[[str], None]] = None,
    ):
        self.users = users
        self.on_registered = on_registered

    async def register(self, user_id: Optional[str], password: Optional[str]) -> User:
        user_id = _normalize_user_id(user_id)
        if not user_id or not password:
            raise ValidationFailed()

        # Fast path: skip the bcrypt cost for an identifier we already know
        if await self.users.get_by_user_id(user_id) is not None:
            raise UserAlreadyExists()

        try:
            hashed_password = await run_in_threadpool(get_password_hash, password)
        except ValueError as exc:
            # bcrypt rejects some inputs outright, e.g. NUL bytes
            logger.info(f"Registration for '{user_id}' rejected: {exc}")
            raise ValidationFailed("Password contains unsupported characters")

        try:
            user = await self.users.create(user_id, hashed_password)
        except DuplicateIdentifierError:
            logger.info(f"Concurrent registration for '{user_id}' lost the race")
            raise UserAlreadyExists()

        logger.info(f"Registered user '{user_id}'")
        self._notify_registered(user_id)
        return user

    async def login(self, user_id: Optional[str], password: Optional[str]) -> User:
        user_id = _normalize_user_id(user_id)
        if not user_id or not password:
            raise ValidationFailed()

        user = await self.users.get_by_user_id(user_id)
        if user is None:
            logger.warning(f"Login attempt failed: User '{user_id}' not found")
            raise UserNotFound()

        if user.is_logged_in:
            logger.warning(f"Login attempt failed: User '{user_id}' already has an active session")
            raise SessionAlreadyActive()

        if not await run_in_threadpool(verify_password, password, user.hashed_password):
            logger.warning(f"Login attempt failed: Invalid password for user '{user_id}'")
            raise InvalidCredentials()

        if not await self.users.activate_session(user):
            logger.warning(f"Login attempt failed: Concurrent login won for user '{user_id}'")
            raise SessionAlreadyActive()

        logger.info(f"User '{user_id}' logged in successfully")
        return user

    async def logout(self, user_id: Optional[str]) -> User:
        """Clear the session flag. Logging out twice is not an error."""
        user_id = _normalize_user_id(user_id)
        if not user_id:
            raise ValidationFailed("Please provide a userId")

        user = await self.users.get_by_user_id(user_id)
        if user is None:
            raise UserNotFound()

        user.is_logged_in = False
        try:
            await self.users.save(user)
        except RecordNotFoundError:
            raise UserNotFound()

        logger.info(f"User '{user_id}' logged out")
        return user

    def _notify_registered(self, user_id: str) -> None:
        if self.on_registered is None:
            return
        try:
            self.on_registered(user_id)
        except Exception:
            logger.exception(f"Post-registration hook failed for '{user_id}'")
