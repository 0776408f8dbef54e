"""Password hashing utilities (bcrypt via passlib)."""
from passlib.context import CryptContext

from app.core.config import get_settings

# Password hashing context (bcrypt, fixed cost factor)
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=get_settings().bcrypt_rounds,
)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a hashed password.

    The comparison itself is constant-time (done inside bcrypt). A stored
    value that is empty or not a recognisable bcrypt hash fails closed.

    Args:
        plain_password: User input password
        hashed_password: Stored bcrypt hash

    Returns:
        True if password matches, False otherwise
    """
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        return False


def get_password_hash(password: str) -> str:
    """Hash a password using bcrypt.

    A fresh random salt is generated on every call and embedded in the
    returned modular-crypt string, so two hashes of the same password differ.

    Args:
        password: Plain text password

    Returns:
        Bcrypt hash string
    """
    return pwd_context.hash(password)
