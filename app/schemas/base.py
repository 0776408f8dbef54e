"""
Base Pydantic schemas and the response envelope.
"""
from http import HTTPStatus
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """Base schema with common configuration."""

    model_config = ConfigDict(
        from_attributes=True,  # Enable ORM mode
        populate_by_name=True,
        use_enum_values=True,
    )


class Envelope(BaseSchema):
    """Wrapper used for every response body.

    Shape: {"status": int, "message": str, "data": object | array, "error": str | null}
    """

    status: int
    message: str
    data: Any = []
    error: Optional[str] = None

    @classmethod
    def success(cls, status: int, message: str, data: Any = None) -> "Envelope":
        return cls(status=status, message=message, data=[] if data is None else data)

    @classmethod
    def failure(cls, status: int, message: str, error: Optional[str] = None) -> "Envelope":
        """Error envelope; error defaults to the HTTP reason phrase."""
        return cls(
            status=status,
            message=message,
            data=[],
            error=error if error is not None else HTTPStatus(status).phrase,
        )
