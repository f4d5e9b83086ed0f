from abc import ABC, abstractmethod

from src.domain.entities import Account


class ResetNotifier(ABC):
    """Out-of-band delivery of password reset secrets"""

    @abstractmethod
    async def send_reset_token(self, account: Account, reset_token: str) -> None:
        """Deliver the plaintext reset token to the account holder"""
        pass
