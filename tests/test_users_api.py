"""
User administration endpoint tests.
"""

from __future__ import annotations

import httpx
import pytest

from tests.conftest import Account, bearer, login

USERS = "/api/v1/users"


@pytest.mark.asyncio
async def test_admin_lists_users(client: httpx.AsyncClient, admin: Account, alice: Account) -> None:
    r = await client.get(USERS, headers=admin.headers)
    assert r.status_code == 200
    body = r.json()
    assert [u["email"] for u in body["data"]] == [admin.email, alice.email]
    assert body["meta"]["total"] == 2
    assert all("password_hash" not in u for u in body["data"])


@pytest.mark.asyncio
async def test_non_admin_cannot_list_or_create(client: httpx.AsyncClient, alice: Account) -> None:
    r = await client.get(USERS, headers=alice.headers)
    assert r.status_code == 403

    r = await client.post(
        USERS,
        json={"name": "Eve", "email": "eve@example.com", "password": "password123"},
        headers=alice.headers,
    )
    assert r.status_code == 403


@pytest.mark.asyncio
async def test_create_user_validation(client: httpx.AsyncClient, admin: Account) -> None:
    r = await client.post(
        USERS,
        json={"name": "", "email": "not-an-email", "password": "short"},
        headers=admin.headers,
    )
    assert r.status_code == 422
    assert set(r.json()["errors"]) == {"name", "email", "password"}


@pytest.mark.asyncio
async def test_create_user_duplicate_email(
    client: httpx.AsyncClient, admin: Account, alice: Account
) -> None:
    r = await client.post(
        USERS,
        json={"name": "Alice 2", "email": "ALICE@example.com", "password": "password123"},
        headers=admin.headers,
    )
    assert r.status_code == 422
    assert "email" in r.json()["errors"]


@pytest.mark.asyncio
async def test_user_can_see_self_but_not_others(
    client: httpx.AsyncClient, alice: Account, bob: Account
) -> None:
    r = await client.get(f"{USERS}/{alice.id}", headers=alice.headers)
    assert r.status_code == 200
    assert r.json()["data"]["email"] == alice.email

    r = await client.get(f"{USERS}/{alice.id}", headers=bob.headers)
    assert r.status_code == 403


@pytest.mark.asyncio
async def test_admin_can_see_anyone(client: httpx.AsyncClient, admin: Account, bob: Account) -> None:
    r = await client.get(f"{USERS}/{bob.id}", headers=admin.headers)
    assert r.status_code == 200


@pytest.mark.asyncio
async def test_missing_user(client: httpx.AsyncClient, admin: Account) -> None:
    r = await client.get(f"{USERS}/999", headers=admin.headers)
    assert r.status_code == 404
    assert r.json()["message"] == "User not found"


@pytest.mark.asyncio
async def test_self_update(client: httpx.AsyncClient, alice: Account) -> None:
    r = await client.put(
        f"{USERS}/{alice.id}", json={"name": "Alice Updated"}, headers=alice.headers
    )
    assert r.status_code == 200
    assert r.json()["data"]["name"] == "Alice Updated"


@pytest.mark.asyncio
async def test_self_cannot_set_password_here(client: httpx.AsyncClient, alice: Account) -> None:
    r = await client.put(
        f"{USERS}/{alice.id}", json={"password": "hijacked-pass"}, headers=alice.headers
    )
    assert r.status_code == 403
    assert "change-password" in r.json()["message"]

    r = await client.post(
        "/api/v1/auth/login", json={"email": alice.email, "password": "hijacked-pass"}
    )
    assert r.status_code == 401
    r = await client.get("/api/v1/auth/me", headers=alice.headers)
    assert r.status_code == 200


@pytest.mark.asyncio
async def test_admin_password_reset_ends_sessions(
    client: httpx.AsyncClient, admin: Account, alice: Account
) -> None:
    r = await client.put(
        f"{USERS}/{alice.id}", json={"password": "another-pass"}, headers=admin.headers
    )
    assert r.status_code == 200

    r = await client.get("/api/v1/auth/me", headers=alice.headers)
    assert r.status_code == 401
    await login(client, alice.email, "another-pass")


@pytest.mark.asyncio
async def test_self_cannot_grant_admin(client: httpx.AsyncClient, alice: Account) -> None:
    r = await client.put(f"{USERS}/{alice.id}", json={"is_admin": True}, headers=alice.headers)
    assert r.status_code == 403


@pytest.mark.asyncio
async def test_admin_grants_admin(
    client: httpx.AsyncClient, admin: Account, alice: Account, bob: Account
) -> None:
    r = await client.put(f"{USERS}/{alice.id}", json={"is_admin": True}, headers=admin.headers)
    assert r.status_code == 200
    assert r.json()["data"]["is_admin"] is True

    # Roles are resolved from the current user row, so Alice's existing token is now an admin one.
    r = await client.get(f"{USERS}/{bob.id}", headers=alice.headers)
    assert r.status_code == 200


@pytest.mark.asyncio
async def test_admin_deletes_user(
    client: httpx.AsyncClient, admin: Account, alice: Account
) -> None:
    r = await client.post("/api/v1/posts", json={"title": "Orphan?"}, headers=alice.headers)
    post_id = r.json()["data"]["id"]

    r = await client.delete(f"{USERS}/{alice.id}", headers=admin.headers)
    assert r.status_code == 200

    r = await client.get(f"{USERS}/{alice.id}", headers=admin.headers)
    assert r.status_code == 404
    # Posts and tokens go with their owner.
    r = await client.get(f"/api/v1/posts/{post_id}", headers=admin.headers)
    assert r.status_code == 404
    r = await client.get("/api/v1/auth/me", headers=bearer(alice.token))
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_non_admin_cannot_delete(
    client: httpx.AsyncClient, alice: Account, bob: Account
) -> None:
    r = await client.delete(f"{USERS}/{bob.id}", headers=alice.headers)
    assert r.status_code == 403
