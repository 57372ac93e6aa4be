"""Evidence Integrity - Pytest Configuration and Fixtures

Provides shared fixtures for all tests including database sessions,
the ledger, test clients, and bearer tokens.
"""

import os
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool


# Set test environment before importing app modules
os.environ["EVIDENCE_INTEGRITY_ENV"] = "test"
os.environ["API_JWT_SECRET"] = "test-secret-key-for-testing-only"
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database session for each test.

    Uses SQLite in-memory for fast, isolated tests.
    """
    from core.database import Base

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with async_session() as session:
        yield session
        await session.rollback()

    await engine.dispose()


@pytest.fixture
def ledger(db_session: AsyncSession):
    """SQLAlchemy ledger bound to the test session."""
    from core.database import SQLAlchemyLedger

    return SQLAlchemyLedger(db_session)


@pytest.fixture
def fake_ledger():
    """In-memory ledger for state machine tests."""
    from tests.fakes import InMemoryLedger

    return InMemoryLedger()


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client with database session override."""
    from api.main import app
    from core.database.session import get_db

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def actor() -> str:
    return "analyst-7f3c"


@pytest.fixture
def auth_headers(actor: str) -> dict[str, str]:
    """Authorization headers for authenticated requests."""
    from api.auth import create_access_token

    token = create_access_token(data={"sub": actor})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def youtube_evidence() -> dict[str, str]:
    return {
        "platform": "youtube",
        "evidence_type": "video",
        "url": "https://youtu.be/abc12345678",
        "case_id": "CASE-1",
    }
