"""
Integration tests for requesting a password reset

- Known email stores a digest and a one-hour expiry
- Unknown email: generic success by default, 404 when configured to reveal
"""
from datetime import timedelta

import pytest
from httpx import AsyncClient
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.libs.clock import utc_now
from src.app.services.reset_token_generator import ResetTokenGenerator
from src.domain.entities import Account


async def create_account(client: AsyncClient, email: str = "ada@example.com"):
    response = await client.post("/auth/signup", json={
        "name": "Ada",
        "email": email,
        "password": "OldPass123!",
    })
    assert response.status_code == 201


async def load_account(db_session: AsyncSession, email: str) -> Account:
    result = await db_session.exec(
        select(Account).where(Account.email == email).execution_options(populate_existing=True)
    )
    return result.one()


@pytest.mark.asyncio
async def test_forgot_password_sets_reset_token(client: AsyncClient, db_session: AsyncSession, notifier):
    await create_account(client)

    before = utc_now()
    response = await client.post("/auth/forgot-password", json={"email": "ada@example.com"})

    assert response.status_code == 200
    assert response.json()["status"] == "sent"

    plain_token = notifier.sent["ada@example.com"]
    account = await load_account(db_session, "ada@example.com")
    assert account.reset_token == ResetTokenGenerator.digest(plain_token)
    assert account.reset_token_expires_at is not None
    expected = before + timedelta(hours=1)
    assert abs((account.reset_token_expires_at - expected).total_seconds()) < 60


@pytest.mark.asyncio
async def test_forgot_password_unknown_email_is_generic(client: AsyncClient, notifier):
    await create_account(client)

    unknown = await client.post("/auth/forgot-password", json={"email": "nobody@example.com"})
    known = await client.post("/auth/forgot-password", json={"email": "ada@example.com"})

    assert unknown.status_code == known.status_code == 200
    assert unknown.json() == known.json()
    assert "nobody@example.com" not in notifier.sent


@pytest.mark.asyncio
async def test_forgot_password_unknown_email_revealed(client: AsyncClient, monkeypatch, notifier):
    monkeypatch.setattr(ApplicationConfig, "RESET_REVEALS_UNKNOWN_EMAIL", True)

    response = await client.post("/auth/forgot-password", json={"email": "nobody@example.com"})

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "ACCOUNT_NOT_FOUND"
    assert notifier.sent == {}


@pytest.mark.asyncio
async def test_forgot_password_clears_other_expired_tokens(client: AsyncClient, db_session: AsyncSession):
    await create_account(client, "stale@example.com")
    await create_account(client, "ada@example.com")

    stale = await load_account(db_session, "stale@example.com")
    stale.begin_password_reset("stale-digest", utc_now() - timedelta(minutes=1))
    db_session.add(stale)
    await db_session.commit()

    response = await client.post("/auth/forgot-password", json={"email": "ada@example.com"})
    assert response.status_code == 200

    stale = await load_account(db_session, "stale@example.com")
    assert stale.reset_token is None
    assert stale.reset_token_expires_at is None


@pytest.mark.asyncio
async def test_forgot_password_invalid_email(client: AsyncClient):
    response = await client.post("/auth/forgot-password", json={"email": "not-an-email"})

    assert response.status_code == 422
