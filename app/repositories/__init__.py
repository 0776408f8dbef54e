from .user import DuplicateIdentifierError, RecordNotFoundError, UserRepository

__all__ = ["DuplicateIdentifierError", "RecordNotFoundError", "UserRepository"]
