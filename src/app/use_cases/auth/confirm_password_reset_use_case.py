"""
Confirm Password Reset Use Case

Handles password reset confirmation with single-use token validation.
"""

import logging
from datetime import datetime
from typing import Callable

from src.app.repositories.errors import RepositoryError
from src.app.services.password_hasher import PasswordHasher
from src.app.services.reset_token_generator import ResetTokenGenerator
from src.app.services.unit_of_work import UnitOfWork
from src.libs.clock import utc_now
from src.libs.result import Error, Result, Return
from .dtos import ConfirmPasswordResetResponse
from .password_rules import validate_password

logger = logging.getLogger(__name__)


class ConfirmPasswordResetUseCase:
    """
    Use case for confirming password reset.

    Business Rules:
    - Token is matched by its SHA-256 digest
    - Token must expire strictly after now
    - Unknown, expired and already consumed tokens share one error
    - New password must be at least 8 characters
    - Password hash swap and token clearing happen in one conditional update
    """

    def __init__(
        self,
        uow: UnitOfWork,
        hasher: PasswordHasher,
        reset_tokens: ResetTokenGenerator,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.uow = uow
        self.hasher = hasher
        self.reset_tokens = reset_tokens
        self.clock = clock

    @staticmethod
    def _invalid_token() -> Result[ConfirmPasswordResetResponse]:
        return Return.err(
            Error("INVALID_OR_EXPIRED_RESET_TOKEN", "Invalid or expired token")
        )

    async def execute(
        self, token: str, new_password: str
    ) -> Result[ConfirmPasswordResetResponse]:
        """
        Execute confirm password reset use case.

        Args:
            token: Password reset token (plain text from the reset message)
            new_password: New password to set

        Returns:
            Result with confirmation status, or Error

        Errors:
            - INVALID_PASSWORD: Password does not meet length requirements
            - INVALID_OR_EXPIRED_RESET_TOKEN: Token unknown, expired or used
            - REPOSITORY_UNAVAILABLE: storage failure
        """
        password_validation = validate_password(new_password)
        if password_validation.is_err():
            return Return.err(password_validation.error)

        token_digest = self.reset_tokens.digest(token)
        now = self.clock()

        async with self.uow:
            try:
                account = await self.uow.accounts.get_by_active_reset_token(
                    token_digest, now
                )
                if account is None:
                    return self._invalid_token()

                password_hash = self.hasher.hash(new_password)

                completed = await self.uow.accounts.complete_password_reset(
                    account.id, token_digest, password_hash, now
                )
                if not completed:
                    # Consumed or expired between lookup and update
                    return self._invalid_token()

                await self.uow.commit()
            except RepositoryError:
                logger.exception("Password reset confirmation failed")
                return Return.err(
                    Error("REPOSITORY_UNAVAILABLE", "Account storage is unavailable")
                )

            logger.info("Password reset completed for account %s", account.id)

            return Return.ok(
                ConfirmPasswordResetResponse(
                    status="success",
                    message="Password reset successful",
                )
            )
