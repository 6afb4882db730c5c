import os
import sys
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

sys.path.append(str(Path(__file__).parents[1] / "src"))

# Settings are read once and cached, so the test environment must be in place
# before anything from ledger is imported.
os.environ.setdefault("JWT_SECRET", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from ledger.config import get_settings
from ledger.db.session import get_db
from ledger.main import app

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite://")

if TEST_DATABASE_URL.startswith("sqlite"):
    # One shared in-memory connection so every session sees the same tables.
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
else:
    test_engine = create_async_engine(TEST_DATABASE_URL, echo=False)

TestSessionLocal = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture(scope="function")
async def setup_database():
    """Create tables for tests that need the database, and drop them after.

    This fixture is intentionally NOT autouse so pure unit tests (parser,
    categorizer) run without touching a database.
    """
    from ledger.models.base import Base
    import ledger.models  # noqa: F401  (register tables)

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await test_engine.dispose()


@pytest.fixture
async def db_session(setup_database):
    """Provide test database session with fresh connection per test."""
    async with TestSessionLocal() as session:
        yield session
        await session.rollback()


async def _make_user(db_session: AsyncSession, email: str, name: str):
    from ledger.core.security import hash_password
    from ledger.models.user import User
    from ledger.repositories.user import UserRepository

    repo = UserRepository(db_session)
    return await repo.create(
        User(email=email, name=name, password_hash=hash_password("password123"))
    )


@pytest.fixture
async def test_user(db_session: AsyncSession):
    """Create a test user for authentication tests."""
    return await _make_user(db_session, "testuser@example.com", "Test User")


@pytest.fixture
async def other_user(db_session: AsyncSession):
    """Create a second user for ownership tests."""
    return await _make_user(db_session, "other@example.com", "Other User")


def _headers_for(user) -> dict:
    from ledger.core.security import create_access_token

    settings = get_settings()
    token = create_access_token(
        user_id=user.id, secret=settings.jwt_secret, algorithm=settings.jwt_algorithm
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def auth_headers(test_user):
    """Provide authentication headers with valid JWT token."""
    return _headers_for(test_user)


@pytest.fixture
async def other_auth_headers(other_user):
    """Authentication headers for the second user."""
    return _headers_for(other_user)


@pytest.fixture
async def client(db_session: AsyncSession):
    """Provide test client with database override."""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
