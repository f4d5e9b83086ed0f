"""
Authenticate Use Case

Verifies email and password and issues a bearer access token.
"""

import logging

from src.app.repositories.errors import RepositoryError
from src.app.services.password_hasher import PasswordHasher
from src.app.services.token_service import TokenService
from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Error, Result, Return
from .dtos import LoginResponse

logger = logging.getLogger(__name__)


class AuthenticateUseCase:
    """
    Use case for login and JWT issuance.

    Business Rules:
    - Unknown email and wrong password produce the same INVALID_CREDENTIALS
    - Password check always runs, even when no account exists
    - Access token is valid for one hour
    - Nothing is written; no commit
    """

    def __init__(self, uow: UnitOfWork, hasher: PasswordHasher, tokens: TokenService):
        self.uow = uow
        self.hasher = hasher
        self.tokens = tokens

    async def execute(self, email: str, password: str) -> Result[LoginResponse]:
        """
        Execute authenticate use case.

        Args:
            email: Account email
            password: Plain text password

        Returns:
            Result with LoginResponse containing the access token, or Error
        """
        async with self.uow:
            try:
                account = await self.uow.accounts.get_by_email(email)
            except RepositoryError:
                logger.exception("Account lookup failed during login")
                return Return.err(
                    Error("REPOSITORY_UNAVAILABLE", "Account storage is unavailable")
                )

            if account is None:
                self.hasher.verify_dummy(password)
                return Return.err(Error("INVALID_CREDENTIALS", "Invalid credentials"))

            if not self.hasher.verify(password, account.password_hash):
                return Return.err(Error("INVALID_CREDENTIALS", "Invalid credentials"))

            token = self.tokens.issue(account.id, account.email)

            return Return.ok(
                LoginResponse(
                    message="Login successful",
                    token=token,
                    expires_in=int(self.tokens.ttl.total_seconds()),
                )
            )
