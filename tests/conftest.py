"""Root conftest.py -- shared fixtures for all test modules."""
import os
from unittest.mock import AsyncMock

import pytest

# Set env vars BEFORE any app imports to prevent real DB/Redis connections
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("CELERY_BROKER_URL", "memory://")
os.environ.setdefault("CELERY_RESULT_BACKEND", "cache+memory://")
os.environ.setdefault("CREATE_TABLES_ON_STARTUP", "false")

from app.core.config import get_settings, Settings
from app.core.security import get_password_hash
from app.db.database import build_engine, build_session_maker, drop_db, init_db
from app.repositories.user import UserRepository


# =========================================================================
# Settings
# =========================================================================
@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Clear LRU cache before each test to prevent stale settings."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def test_settings() -> Settings:
    return get_settings()


# =========================================================================
# Password Fixtures
# =========================================================================
@pytest.fixture(scope="session")
def alice_password_hash() -> str:
    return get_password_hash("pw1")


# =========================================================================
# In-memory database
# =========================================================================
@pytest.fixture
async def db_engine():
    """Fresh in-memory SQLite database with the schema created."""
    engine = build_engine("sqlite+aiosqlite://")
    await init_db(engine)
    yield engine
    await drop_db(engine)
    await engine.dispose()


@pytest.fixture
def session_maker(db_engine):
    return build_session_maker(db_engine)


@pytest.fixture
async def session(session_maker):
    async with session_maker() as s:
        yield s


@pytest.fixture
def user_repository(session) -> UserRepository:
    return UserRepository(session)


@pytest.fixture
def make_user(session_maker, alice_password_hash):
    """Insert a user through its own session and return it."""

    async def _make(
        user_id: str = "alice",
        hashed_password: str = None,
        is_logged_in: bool = False,
    ):
        async with session_maker() as s:
            repo = UserRepository(s)
            user = await repo.create(user_id, hashed_password or alice_password_hash)
            if is_logged_in:
                await repo.activate_session(user)
            return user

    return _make


# =========================================================================
# Mock repository
# =========================================================================
@pytest.fixture
def mock_repository() -> AsyncMock:
    """Mock UserRepository (no real DB needed)."""
    repo = AsyncMock(spec=UserRepository)
    repo.get_by_user_id = AsyncMock(return_value=None)
    repo.create = AsyncMock()
    repo.save = AsyncMock()
    repo.activate_session = AsyncMock(return_value=True)
    return repo


# =========================================================================
# FastAPI Test Client
# =========================================================================
@pytest.fixture
def app():
    from app.main import app as fastapi_app
    return fastapi_app


@pytest.fixture
def sent_notifications(monkeypatch) -> list:
    """Capture welcome notifications instead of talking to a broker."""
    sent: list = []
    monkeypatch.setattr(
        "app.core.dependencies.dispatch_welcome_notification",
        sent.append,
    )
    return sent


@pytest.fixture
async def client(app, session_maker, sent_notifications):
    """httpx.AsyncClient backed by the in-memory database."""
    from httpx import AsyncClient, ASGITransport
    from app.db.database import get_async_session

    async def override_session():
        async with session_maker() as s:
            try:
                yield s
                await s.commit()
            except Exception:
                await s.rollback()
                raise

    app.dependency_overrides[get_async_session] = override_session

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
