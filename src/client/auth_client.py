"""
Async HTTP client for the auth API.

Keeps the bearer token in memory and applies it through explicit httpx
event hooks instead of global interceptors. The client never verifies
tokens; it only stores and forwards them.
"""

import logging
from datetime import datetime
from typing import Any, Callable, Dict, Optional

import httpx
from jose import JWTError, jwt

from src.libs.clock import from_timestamp, utc_now

logger = logging.getLogger(__name__)


class TokenStore:
    """
    In-memory holder for the current bearer token.

    current_user() and is_expired() read the payload WITHOUT checking the
    signature. They are for display and for skipping doomed requests only;
    the server remains the sole judge of a token.
    """

    def __init__(
        self,
        token: Optional[str] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._token = token
        self._clock = clock

    def get(self) -> Optional[str]:
        return self._token

    def set(self, token: str) -> None:
        if not token:
            raise ValueError("Refusing to store an empty token")
        self._token = token

    def clear(self) -> None:
        self._token = None

    def is_authenticated(self) -> bool:
        """True when a JWT-shaped token is stored; anything else is discarded"""
        if self._token is None:
            return False
        if len(self._token.split(".")) != 3:
            logger.info("Discarding stored token that is not a JWT")
            self.clear()
            return False
        return True

    def current_user(self) -> Optional[Dict[str, Any]]:
        """Unverified id, email, iat and exp of the stored token, for display"""
        if not self.is_authenticated():
            return None
        try:
            claims = jwt.get_unverified_claims(self._token)
        except JWTError:
            return None
        return {key: claims.get(key) for key in ("id", "email", "iat", "exp")}

    def is_expired(self) -> bool:
        """True when there is no readable token or now >= its exp claim"""
        user = self.current_user()
        if user is None or not isinstance(user["exp"], int):
            return True
        return self._clock() >= from_timestamp(user["exp"])


class AuthApiError(Exception):
    def __init__(self, status_code: int, code: str, message: str):
        self.status_code = status_code
        self.code = code
        self.message = message
        super().__init__(f"{status_code} {code}: {message}")


class AuthApiClient:
    """
    Client for the signup, login, password reset and protected routes.

    Hooks:
    - request: attach "Authorization: Bearer <token>" when a token is stored
    - response: drop the stored token on 401/403
    """

    def __init__(
        self,
        base_url: str = "http://localhost:5000",
        token_store: Optional[TokenStore] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.token_store = token_store or TokenStore()
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
            headers={"Content-Type": "application/json"},
            event_hooks={
                "request": [self._attach_token],
                "response": [self._drop_token_on_auth_failure],
            },
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _attach_token(self, request: httpx.Request) -> None:
        token = self.token_store.get()
        if token:
            request.headers["Authorization"] = f"Bearer {token}"

    async def _drop_token_on_auth_failure(self, response: httpx.Response) -> None:
        if response.status_code in (401, 403) and self.token_store.is_authenticated():
            self.token_store.clear()
            logger.info("Token expired or invalid, cleared stored token")

    @staticmethod
    def _parse(response: httpx.Response) -> Dict[str, Any]:
        if response.is_success:
            return response.json()

        try:
            error = response.json()["error"]
            code, message = error["code"], error["message"]
        except (ValueError, KeyError, TypeError):
            code, message = "HTTP_ERROR", response.text
        raise AuthApiError(response.status_code, code, message)

    async def signup(self, name: str, email: str, password: str) -> Dict[str, Any]:
        response = await self._client.post(
            "/auth/signup", json={"name": name, "email": email, "password": password}
        )
        return self._parse(response)

    async def login(self, email: str, password: str) -> Dict[str, Any]:
        """Log in and keep the returned token for later requests"""
        response = await self._client.post(
            "/auth/login", json={"email": email, "password": password}
        )
        data = self._parse(response)
        self.token_store.set(data["token"])
        return data

    def logout(self) -> None:
        self.token_store.clear()

    async def forgot_password(self, email: str) -> Dict[str, Any]:
        response = await self._client.post("/auth/forgot-password", json={"email": email})
        return self._parse(response)

    async def reset_password(self, reset_token: str, new_password: str) -> Dict[str, Any]:
        response = await self._client.post(
            "/auth/reset-password",
            json={"reset_token": reset_token, "new_password": new_password},
        )
        return self._parse(response)

    async def protected(self) -> Dict[str, Any]:
        response = await self._client.get("/protected")
        return self._parse(response)
