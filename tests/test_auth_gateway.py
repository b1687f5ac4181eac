"""
JWT helper and `JwtAuthGateway` tests.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.auth.gateway import JwtAuthGateway
from blog_api.auth.jwt import JwtConfig, JwtValidationError, decode_and_validate, issue_token
from blog_api.auth.password import hash_password, verify_password
from blog_api.db.repositories.tokens import TokenRepo
from blog_api.db.repositories.users import UserRepo
from blog_api.errors import AuthError
from blog_api.settings import Settings

CFG = JwtConfig(alg="HS256", issuer="iss", audience="aud", secret="s3cret")


def test_issue_and_decode_round_trip() -> None:
    token = issue_token(cfg=CFG, subject="7", token_id="abc", roles=["admin"])
    claims = decode_and_validate(cfg=CFG, token=token)
    assert claims["sub"] == "7"
    assert claims["jti"] == "abc"
    assert claims["roles"] == ["admin"]


@pytest.mark.parametrize(
    "cfg",
    [
        JwtConfig(alg="HS256", issuer="other", audience="aud", secret="s3cret"),
        JwtConfig(alg="HS256", issuer="iss", audience="other", secret="s3cret"),
        JwtConfig(alg="HS256", issuer="iss", audience="aud", secret="wrong"),
    ],
)
def test_decode_rejects_mismatched_config(cfg: JwtConfig) -> None:
    token = issue_token(cfg=CFG, subject="7", token_id="abc", roles=[])
    with pytest.raises(JwtValidationError):
        decode_and_validate(cfg=cfg, token=token)


def test_decode_rejects_expired() -> None:
    token = issue_token(
        cfg=CFG,
        subject="7",
        token_id="abc",
        roles=[],
        ttl=timedelta(minutes=1),
        now=datetime.now(tz=UTC) - timedelta(hours=1),
    )
    with pytest.raises(JwtValidationError):
        decode_and_validate(cfg=CFG, token=token)


def test_password_hashing() -> None:
    hashed = hash_password("hunter22", rounds=4)
    assert hashed != "hunter22"
    assert verify_password("hunter22", hashed)
    assert not verify_password("hunter23", hashed)
    assert not verify_password("hunter22", "not-a-bcrypt-hash")


@pytest.fixture
def gateway_settings(settings: Settings) -> Settings:
    return settings.model_copy(update={"token_ttl_minutes": 5})


@pytest.mark.asyncio
async def test_gateway_issue_resolve_revoke(session: AsyncSession, gateway_settings: Settings) -> None:
    user = await UserRepo(session).create(
        {"name": "G", "email": "g@example.com", "password_hash": "x", "is_admin": True}
    )
    gateway = JwtAuthGateway(session=session, settings=gateway_settings)

    token = await gateway.issue_token(user, name="cli")
    principal = await gateway.resolve_principal(token)
    assert principal.id == user.id
    assert principal.is_admin
    assert principal.token_id is not None

    row = await TokenRepo(session).find_by_id(principal.token_id)
    assert row.name == "cli"
    assert row.last_used_at is not None

    assert await gateway.revoke(principal) is True
    assert await gateway.revoke(principal) is False
    with pytest.raises(AuthError):
        await gateway.resolve_principal(token)


@pytest.mark.asyncio
async def test_gateway_revoke_all(session: AsyncSession, gateway_settings: Settings) -> None:
    user = await UserRepo(session).create(
        {"name": "G", "email": "g@example.com", "password_hash": "x"}
    )
    gateway = JwtAuthGateway(session=session, settings=gateway_settings)
    tokens = [await gateway.issue_token(user) for _ in range(3)]

    assert await gateway.revoke_all(user.id) == 3
    for token in tokens:
        with pytest.raises(AuthError):
            await gateway.resolve_principal(token)


@pytest.mark.asyncio
async def test_gateway_rejects_expired_row(session: AsyncSession, gateway_settings: Settings) -> None:
    user = await UserRepo(session).create(
        {"name": "G", "email": "g@example.com", "password_hash": "x"}
    )
    gateway = JwtAuthGateway(session=session, settings=gateway_settings)
    token = await gateway.issue_token(user)
    principal = await gateway.resolve_principal(token)

    # Expire the row while the JWT itself is still within its `exp`.
    row = await TokenRepo(session).find_by_id(principal.token_id)
    row.expires_at = datetime.now(tz=UTC).replace(tzinfo=None) - timedelta(seconds=1)
    await session.flush()

    with pytest.raises(AuthError, match="revoked or has expired"):
        await gateway.resolve_principal(token)


@pytest.mark.asyncio
async def test_gateway_rejects_garbage(session: AsyncSession, gateway_settings: Settings) -> None:
    gateway = JwtAuthGateway(session=session, settings=gateway_settings)
    with pytest.raises(AuthError, match="Invalid token"):
        await gateway.resolve_principal("garbage")
