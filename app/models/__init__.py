"""
SQLAlchemy ORM models. Importing this package registers every table on
Base.metadata (init_db and Alembic rely on that).
"""
from app.models.user import User

__all__ = ["User"]
