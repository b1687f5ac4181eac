"""
tests.conftest

Shared fixtures.

Strategy:
- Every test builds its own app from `create_app(settings=...)` backed by an
  in-memory SQLite database (StaticPool, see `db.session.create_engine`), so
  tests are isolated and need no external services.
- The app lifespan is entered explicitly because httpx's ASGITransport does not
  run it; the lifespan creates tables and seeds the bootstrap admin.
- bcrypt runs with its minimum work factor to keep the suite fast.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from dataclasses import dataclass

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.api.app import create_app
from blog_api.settings import Settings

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "admin-password"


@dataclass
class Account:
    id: int
    email: str
    password: str
    token: str

    @property
    def headers(self) -> dict[str, str]:
        return bearer(self.token)


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


async def login(client: httpx.AsyncClient, email: str, password: str) -> str:
    r = await client.post("/api/v1/auth/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    return r.json()["data"]["access_token"]


@pytest.fixture
def settings() -> Settings:
    return Settings(
        env="test",
        database_url="sqlite+aiosqlite:///:memory:",
        jwt_secret="test-secret",
        bcrypt_rounds=4,
        log_level="WARNING",
        admin_email=ADMIN_EMAIL,
        admin_password=ADMIN_PASSWORD,
    )


@pytest_asyncio.fixture
async def app(settings: Settings) -> AsyncIterator[FastAPI]:
    app = create_app(settings=settings)
    async with app.router.lifespan_context(app):
        yield app


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def session(app: FastAPI) -> AsyncIterator[AsyncSession]:
    """A live session for tests that drive repositories/services directly."""
    async with app.state.sessionmaker() as session:
        yield session


@pytest_asyncio.fixture
async def admin(client: httpx.AsyncClient) -> Account:
    token = await login(client, ADMIN_EMAIL, ADMIN_PASSWORD)
    r = await client.get("/api/v1/auth/me", headers=bearer(token))
    return Account(id=r.json()["data"]["id"], email=ADMIN_EMAIL, password=ADMIN_PASSWORD, token=token)


async def make_account(
    client: httpx.AsyncClient, admin: Account, *, name: str, email: str, password: str = "password123"
) -> Account:
    r = await client.post(
        "/api/v1/users",
        json={"name": name, "email": email, "password": password},
        headers=admin.headers,
    )
    assert r.status_code == 201, r.text
    token = await login(client, email, password)
    return Account(id=r.json()["data"]["id"], email=email, password=password, token=token)


@pytest_asyncio.fixture
async def alice(client: httpx.AsyncClient, admin: Account) -> Account:
    return await make_account(client, admin, name="Alice", email="alice@example.com")


@pytest_asyncio.fixture
async def bob(client: httpx.AsyncClient, admin: Account) -> Account:
    return await make_account(client, admin, name="Bob", email="bob@example.com")
