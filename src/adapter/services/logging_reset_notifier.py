import logging

from src.app.services.reset_notifier import ResetNotifier
from src.domain.entities import Account

logger = logging.getLogger(__name__)


class LoggingResetNotifier(ResetNotifier):
    """
    Simulated email delivery: writes the reset token to the application log.

    Stands in for a real mail sender until one is wired up.
    """

    async def send_reset_token(self, account: Account, reset_token: str) -> None:
        logger.info(
            "Password reset token for %s (simulated email): %s",
            account.email,
            reset_token,
        )
