"""User model for authentication."""
from sqlalchemy import Boolean, String, false
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel


class User(BaseModel):
    """Registered account and its session flag.

    user_id is the login identifier; uniqueness is enforced by the table
    constraint, which is what makes concurrent registrations safe.
    Password is stored as bcrypt hash.
    is_logged_in is the only session state: true from a successful login
    until the next logout.
    """

    __tablename__ = "users"

    user_id: Mapped[str] = mapped_column(
        String(255), unique=True, nullable=False, index=True
    )
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    is_logged_in: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default=false(), nullable=False
    )

    def __repr__(self) -> str:
        return f"<User(user_id={self.user_id}, is_logged_in={self.is_logged_in})>"
