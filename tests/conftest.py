"""
Shared fixtures.

Each test gets a fresh in-memory SQLite database wired into the app through
a dependency override, plus an httpx client talking to the ASGI app directly.
"""
import os

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from expense_tracker.core.database import Base, get_async_session
from expense_tracker.core.security import create_access_token, get_password_hash
from expense_tracker.crud import credential as credential_crud
from expense_tracker.main import app
from expense_tracker.models.credential import Role


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, expire_on_commit=False, class_=AsyncSession)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory):
    async def override_get_async_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_async_session] = override_get_async_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


def auth_headers(credential) -> dict:
    token = create_access_token(
        credential.username,
        extra_claims={"role": credential.role.value, "email": credential.email},
    )
    return {"Authorization": f"Bearer {token}"}


async def make_credential(db, username: str, role: Role = Role.USER, password: str = "secret123"):
    return await credential_crud.create_credential(
        username=username,
        email=f"{username}@example.com",
        hashed_password=get_password_hash(password),
        role=role,
        db=db,
    )


@pytest_asyncio.fixture
async def admin(db):
    return await make_credential(db, "admin", role=Role.ADMIN)


@pytest_asyncio.fixture
async def alice(db):
    return await make_credential(db, "alice")


@pytest_asyncio.fixture
async def bob(db):
    return await make_credential(db, "bob")


@pytest.fixture
def admin_headers(admin):
    return auth_headers(admin)


@pytest.fixture
def alice_headers(alice):
    return auth_headers(alice)


@pytest.fixture
def bob_headers(bob):
    return auth_headers(bob)


@pytest_asyncio.fixture
async def food(client, admin_headers):
    """An active 'Food' category created through the API."""
    response = await client.post(
        "/api/expense-categories",
        json={"name": "Food", "description": "Groceries", "color": "#FF6B6B", "icon": "fas fa-utensils"},
        headers=admin_headers,
    )
    assert response.status_code == 201
    return response.json()
