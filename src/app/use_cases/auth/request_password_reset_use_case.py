"""
Request Password Reset Use Case

Handles generating and delivering password reset tokens.
"""

import logging
from datetime import datetime
from typing import Callable

from src.app.repositories.errors import RepositoryError
from src.app.services.reset_notifier import ResetNotifier
from src.app.services.reset_token_generator import ResetTokenGenerator
from src.app.services.unit_of_work import UnitOfWork
from src.libs.clock import utc_now
from src.libs.result import Error, Result, Return
from .dtos import RequestPasswordResetResponse

logger = logging.getLogger(__name__)

GENERIC_SENT_MESSAGE = "If the email exists, a password reset link has been sent"


class RequestPasswordResetUseCase:
    """
    Use case for requesting password reset.

    Business Rules:
    - Generate a cryptographically secure 256-bit token
    - Store only the SHA-256 digest of the token, with a 1 hour expiry
    - A new request replaces any pending token
    - Expired tokens on other accounts are cleared opportunistically
    - Unknown email: ACCOUNT_NOT_FOUND when reveal_unknown_email is set,
      otherwise the same response as a known email (no enumeration)
    - Plaintext token is handed to the notifier only after commit
    """

    def __init__(
        self,
        uow: UnitOfWork,
        reset_tokens: ResetTokenGenerator,
        notifier: ResetNotifier,
        reveal_unknown_email: bool = False,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.uow = uow
        self.reset_tokens = reset_tokens
        self.notifier = notifier
        self.reveal_unknown_email = reveal_unknown_email
        self.clock = clock

    async def execute(self, email: str) -> Result[RequestPasswordResetResponse]:
        """
        Execute request password reset use case.

        Args:
            email: Account email address

        Returns:
            Result with reset status, or Error

        Errors:
            - ACCOUNT_NOT_FOUND: only when reveal_unknown_email is enabled
            - REPOSITORY_UNAVAILABLE: storage failure
        """
        now = self.clock()

        async with self.uow:
            try:
                cleared = await self.uow.accounts.clear_expired_reset_tokens(now)
                if cleared:
                    logger.debug("Cleared %d expired reset tokens", cleared)

                account = await self.uow.accounts.get_by_email(email)

                if account is None:
                    # Commit the cleanup even when nothing else changes
                    await self.uow.commit()
                    if self.reveal_unknown_email:
                        return Return.err(Error("ACCOUNT_NOT_FOUND", "User not found."))
                    return Return.ok(
                        RequestPasswordResetResponse(
                            status="sent", message=GENERIC_SENT_MESSAGE
                        )
                    )

                reset_token = self.reset_tokens.generate()
                account.begin_password_reset(
                    self.reset_tokens.digest(reset_token),
                    self.reset_tokens.expiry_from(now),
                )
                await self.uow.accounts.update(account)
                await self.uow.commit()
            except RepositoryError:
                logger.exception("Password reset request failed")
                return Return.err(
                    Error("REPOSITORY_UNAVAILABLE", "Account storage is unavailable")
                )

            await self.notifier.send_reset_token(account, reset_token)

            message = (
                "Password reset link has been sent to your email."
                if self.reveal_unknown_email
                else GENERIC_SENT_MESSAGE
            )
            return Return.ok(RequestPasswordResetResponse(status="sent", message=message))
