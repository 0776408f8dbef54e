"""Authentication request/response schemas.

Field presence is not enforced here: missing fields arrive as None and the
auth service reports them with its own messages.
"""
from typing import Optional

from pydantic import Field

from .base import BaseSchema


class Credentials(BaseSchema):
    """Register / login body."""

    user_id: Optional[str] = Field(default=None, alias="userId")
    password: Optional[str] = None


class LogoutRequest(BaseSchema):
    user_id: Optional[str] = Field(default=None, alias="userId")


class UserPublic(BaseSchema):
    """Client-visible view of a user. Never includes the password hash."""

    user_id: str = Field(..., serialization_alias="userId")
    is_logged_in: bool = Field(..., serialization_alias="isLoggedIn")
