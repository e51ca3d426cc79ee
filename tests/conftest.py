"""Shared fixtures: fresh in-memory database per test and an API client bound to it."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET", "test-secret-key-that-is-long-enough-for-hs256")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("CREATE_TABLES_ON_STARTUP", "false")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import StaticPool
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from splitter.db.session import Base, get_db
from splitter.core.jwt_config import get_token_verifier
from splitter.schemas.user import UserCreate
from splitter.services.user_service import create_user
import splitter.models.user  # noqa: F401
import splitter.models.expense  # noqa: F401
import splitter.models.expense_split  # noqa: F401
from splitter.main import app


@pytest.fixture
async def test_engine():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_session_factory):
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def make_user(test_db):
    async def _make(name: str, email: str | None = None, password: str = "secret123"):
        email = email or f"{name.lower()}@splitter.io"
        return await create_user(test_db, UserCreate(name=name, email=email, password=password))
    return _make


def auth_header(user) -> dict:
    return {"Authorization": f"Bearer {get_token_verifier().issue(user.id)}"}


@pytest.fixture
async def alice(make_user):
    return await make_user("Alice")


@pytest.fixture
async def bob(make_user):
    return await make_user("Bob")
