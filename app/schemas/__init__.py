"""
Pydantic schemas for request/response validation.
"""
from app.schemas.base import BaseSchema, Envelope
from app.schemas.auth import Credentials, LogoutRequest, UserPublic

__all__ = [
    "BaseSchema",
    "Envelope",
    "Credentials",
    "LogoutRequest",
    "UserPublic",
]
