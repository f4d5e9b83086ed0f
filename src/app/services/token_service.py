"""
Access token issuance and verification.

Tokens are HS256 JWTs signed with a single process-wide secret that is
injected at construction time.
"""

import calendar
from datetime import datetime, timedelta
from typing import Callable
from uuid import UUID

from jose import JWTError, jwt
from jose.exceptions import JWTClaimsError
from pydantic import BaseModel

from src.libs.clock import from_timestamp, utc_now
from src.libs.result import Error, Result, Return

DEFAULT_ACCESS_TOKEN_TTL = timedelta(hours=1)


class AccessClaims(BaseModel):
    """Verified identity claims carried by an access token"""

    account_id: UUID
    email: str
    issued_at: datetime
    expires_at: datetime


def _timestamp(moment: datetime) -> int:
    # Naive datetimes are treated as UTC
    return calendar.timegm(moment.utctimetuple())


class TokenService:
    """
    Issues and verifies signed, time-limited access tokens.

    Business Rules:
    - Payload carries id, email, iat and exp (exp = iat + ttl)
    - Signature is checked before expiry
    - Expired when now >= exp
    - Unverified claims are never returned to callers
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        ttl: timedelta = DEFAULT_ACCESS_TOKEN_TTL,
        clock: Callable[[], datetime] = utc_now,
    ):
        if not secret:
            raise ValueError("Token signing secret must not be empty")
        self._secret = secret
        self.algorithm = algorithm
        self.ttl = ttl
        self._clock = clock

    def issue(self, account_id: UUID, email: str) -> str:
        """
        Generate a signed access token.

        Args:
            account_id: Account UUID
            email: Account email

        Returns:
            JWT token string
        """
        now = self._clock()
        payload = {
            "id": str(account_id),
            "email": email,
            "iat": _timestamp(now),
            "exp": _timestamp(now + self.ttl),
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Result[AccessClaims]:
        """
        Verify and decode an access token.

        Returns:
            Result with AccessClaims, or Error

        Errors:
            - TOKEN_MALFORMED: token cannot be decoded or lacks required claims
            - TOKEN_INVALID_SIGNATURE: signature does not match
            - TOKEN_EXPIRED: token lifetime has elapsed
        """
        # Header only; the payload is not parsed until its signature checks out
        try:
            jwt.get_unverified_header(token)
        except JWTError as exc:
            return Return.err(Error("TOKEN_MALFORMED", f"Malformed token: {exc}"))

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"verify_exp": False},
            )
        except JWTClaimsError as exc:
            # Signature is valid but a registered claim has the wrong type
            return Return.err(Error("TOKEN_MALFORMED", f"Invalid token claims: {exc}"))
        except JWTError as exc:
            return Return.err(
                Error("TOKEN_INVALID_SIGNATURE", f"Signature verification failed: {exc}")
            )

        try:
            account_id = UUID(payload["id"])
            email = payload["email"]
            issued_at = int(payload["iat"])
            expires_at = int(payload["exp"])
        except (KeyError, TypeError, ValueError) as exc:
            return Return.err(
                Error("TOKEN_MALFORMED", f"Token is missing required claims: {exc}")
            )
        if not isinstance(email, str):
            return Return.err(Error("TOKEN_MALFORMED", "Token email claim is invalid"))

        if _timestamp(self._clock()) >= expires_at:
            return Return.err(Error("TOKEN_EXPIRED", "Token has expired"))

        return Return.ok(
            AccessClaims(
                account_id=account_id,
                email=email,
                issued_at=from_timestamp(issued_at),
                expires_at=from_timestamp(expires_at),
            )
        )
