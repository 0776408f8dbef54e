"""
User store: the only code that reads or writes the users table.

Every write commits immediately, so each call observes and leaves behind
committed state. Nothing is cached between calls.
"""
import logging

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.attributes import set_committed_value

from app.models.user import User

logger = logging.getLogger(__name__)


class DuplicateIdentifierError(Exception):
    """A user with this identifier already exists (unique constraint)."""


class RecordNotFoundError(Exception):
    """The user record to update no longer exists."""


class UserRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_user_id(self, user_id: str) -> User | None:
        """Retrieves a User by their unique login identifier."""
        stmt = select(User).where(User.user_id == user_id)
        return (await self.session.scalars(stmt)).one_or_none()

    async def create(self, user_id: str, hashed_password: str) -> User:
        """Insert a new, logged-out user.

        Raises DuplicateIdentifierError when the unique constraint rejects
        the row. There is no read-before-write here: two concurrent inserts
        of the same identifier are arbitrated by the database.
        """
        user = User(user_id=user_id, hashed_password=hashed_password, is_logged_in=False)
        self.session.add(user)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            await self.session.rollback()
            raise DuplicateIdentifierError(user_id) from exc
        await self.session.commit()
        return user

    async def save(self, user: User) -> None:
        """Persist the session flag of an existing user.

        Raises RecordNotFoundError if the row is gone.
        """
        result = await self.session.execute(
            update(User)
            .where(User.id == user.id)
            .values(is_logged_in=user.is_logged_in)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            raise RecordNotFoundError(user.user_id)
        # Already written above; keep the commit from flushing it again
        set_committed_value(user, "is_logged_in", user.is_logged_in)
        await self.session.commit()

    async def activate_session(self, user: User) -> bool:
        """Flip is_logged_in from false to true in a single statement.

        Returns False when the row was already logged in (or missing), which
        is how a lost race between two concurrent logins shows up.
        """
        result = await self.session.execute(
            update(User)
            .where(User.id == user.id, User.is_logged_in == False)  # noqa: E712
            .values(is_logged_in=True)
            .execution_options(synchronize_session=False)
        )
        await self.session.commit()
        if result.rowcount != 1:
            logger.debug(f"Conditional login update matched no row for '{user.user_id}'")
            return False
        set_committed_value(user, "is_logged_in", True)
        return True
