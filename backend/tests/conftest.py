"""
Pytest fixtures for test database, client, users and tokens.

Uses an in-memory SQLite database (aiosqlite) with tables created and
dropped around every test, and overrides the get_db dependency.
"""

import os

# Settings are read once per process; set them before the app is imported.
os.environ["JWT_ACCESS_SECRET"] = "test-access-secret"
os.environ["JWT_REFRESH_SECRET"] = "test-refresh-secret"
os.environ["AUTO_SEED"] = "false"
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"

import json
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from pwdlib import PasswordHash
from pwdlib.hashers.bcrypt import BcryptHasher
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from cultural_spa.core import security
from cultural_spa.core.config import get_settings
from cultural_spa.core.tokens import sign_access_token
from cultural_spa.db.base import Base
from cultural_spa.db.session import get_db
from cultural_spa.main import app
from cultural_spa.models import User, Venue
from cultural_spa.services.auth_service import claims_for
from cultural_spa.services.seed_service import seed_dataset_if_needed, seed_users_if_needed

test_engine = create_async_engine(
    "sqlite+aiosqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSessionLocal = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture(autouse=True)
def fast_password_hashing(monkeypatch):
    """Cost 12 is deliberately slow; tests only need valid bcrypt hashes."""
    monkeypatch.setattr(security, "password_hash", PasswordHash((BcryptHasher(rounds=4),)))


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create tables, yield session, then drop tables for isolation."""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with TestSessionLocal() as session:
        yield session

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client that overrides the DB dependency with the test session."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


async def create_user(db: AsyncSession, username: str, password: str, role: str = "user") -> User:
    user = User(username=username, password_hash=security.hash_password(password), role=role)
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


def bearer(user: User) -> dict:
    return {"Authorization": f"Bearer {sign_access_token(claims_for(user))}"}


@pytest_asyncio.fixture
async def member(db_session: AsyncSession) -> User:
    return await create_user(db_session, "alice", "alicepass1")


@pytest_asyncio.fixture
async def admin(db_session: AsyncSession) -> User:
    return await create_user(db_session, "root", "rootpass1", role="admin")


@pytest_asyncio.fixture
async def member_headers(member: User) -> dict:
    return bearer(member)


@pytest_asyncio.fixture
async def admin_headers(admin: User) -> dict:
    return bearer(admin)


@pytest_asyncio.fixture
async def venue(db_session: AsyncSession) -> Venue:
    venue = Venue(id="v1", name="Test Hall", latitude=22.3, longitude=114.1)
    db_session.add(venue)
    await db_session.commit()
    return venue


@pytest_asyncio.fixture
async def seeded(db_session: AsyncSession) -> dict:
    """Default users plus the bundled dataset; returns the raw dataset lists."""
    settings = get_settings()
    await seed_users_if_needed(db_session)
    await seed_dataset_if_needed(db_session, settings.DATASET_DIR)
    return {
        "venues": json.loads((settings.DATASET_DIR / "venues.json").read_text(encoding="utf-8")),
        "events": json.loads((settings.DATASET_DIR / "events.json").read_text(encoding="utf-8")),
    }


@pytest_asyncio.fixture
async def make_user(db_session: AsyncSession):
    """Factory: await make_user("bob", "bobpass1", role="admin")."""

    async def _make(username: str, password: str, role: str = "user") -> User:
        return await create_user(db_session, username, password, role)

    return _make


@pytest.fixture
def auth_headers():
    """Factory: bearer headers carrying a fresh access token for a user."""
    return bearer
