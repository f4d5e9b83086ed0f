"""
Integration tests for the bearer-token gate on /protected

- Missing or non-Bearer Authorization: 401
- Malformed, forged or expired token: 403 with one generic message
- Fresh token: 200
"""
from datetime import timedelta
from uuid import uuid4

import pytest
from httpx import AsyncClient

from config import ApplicationConfig
from src.libs.clock import utc_now
from src.app.services.token_service import TokenService
from tests.utils.json_compare import error_body


async def signup_and_login(client: AsyncClient) -> str:
    response = await client.post("/auth/signup", json={
        "name": "Ada",
        "email": "ada@example.com",
        "password": "SecurePass123!",
    })
    assert response.status_code == 201
    response = await client.post("/auth/login", json={
        "email": "ada@example.com",
        "password": "SecurePass123!",
    })
    assert response.status_code == 200
    return response.json()["token"]


@pytest.mark.asyncio
async def test_protected_with_fresh_token(client: AsyncClient):
    token = await signup_and_login(client)

    response = await client.get("/protected", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    data = response.json()
    assert data["email"] == "ada@example.com"
    assert data["message"] == (
        "Hello, ada@example.com. You have access to this protected route."
    )


@pytest.mark.asyncio
async def test_protected_without_header(client: AsyncClient):
    response = await client.get("/protected")

    assert response.status_code == 401
    assert response.json() == error_body(
        "UNAUTHENTICATED", "Access denied. No valid token provided."
    )


@pytest.mark.asyncio
@pytest.mark.parametrize("header", ["Basic YWRhOnNlY3JldA==", "Bearer", "Token abc"])
async def test_protected_wrong_scheme(client: AsyncClient, header):
    response = await client.get("/protected", headers={"Authorization": header})

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHENTICATED"


@pytest.mark.asyncio
async def test_protected_rejects_expired_token_but_accepts_fresh_one(client: AsyncClient):
    fresh = await signup_and_login(client)
    account_id = (await client.get(
        "/protected", headers={"Authorization": f"Bearer {fresh}"}
    )).json()["account_id"]

    issued_two_hours_ago = TokenService(
        secret=ApplicationConfig.JWT_SECRET,
        clock=lambda: utc_now() - timedelta(hours=2),
    )
    expired = issued_two_hours_ago.issue(account_id, "ada@example.com")

    expired_response = await client.get("/protected", headers={"Authorization": f"Bearer {expired}"})
    fresh_response = await client.get("/protected", headers={"Authorization": f"Bearer {fresh}"})

    assert expired_response.status_code == 403
    assert expired_response.json()["error"]["code"] == "INVALID_TOKEN"
    assert fresh_response.status_code == 200


@pytest.mark.asyncio
async def test_protected_failure_reasons_share_one_response(client: AsyncClient):
    forged = TokenService(secret="not-the-server-secret").issue(uuid4(), "ada@example.com")
    expired = TokenService(
        secret=ApplicationConfig.JWT_SECRET,
        clock=lambda: utc_now() - timedelta(hours=2),
    ).issue(uuid4(), "ada@example.com")

    responses = [
        await client.get("/protected", headers={"Authorization": f"Bearer {token}"})
        for token in ("garbage", forged, expired)
    ]

    assert all(r.status_code == 403 for r in responses)
    bodies = [r.json() for r in responses]
    assert bodies[0] == bodies[1] == bodies[2] == {
        "error": {"code": "INVALID_TOKEN", "message": "Invalid or expired token"}
    }


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient):
    response = await client.get("/")

    assert response.status_code == 200
    assert response.json() == {"message": "API is running..."}
