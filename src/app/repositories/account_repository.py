from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from src.domain.entities import Account


class IAccountRepository(ABC):
    """Account repository interface - application layer

    Implementations raise RepositoryError (DuplicateEmailError on a
    unique email violation) instead of driver-specific exceptions.
    """

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[Account]:
        """Get account by email address"""
        pass

    @abstractmethod
    async def get_by_id(self, account_id: UUID) -> Optional[Account]:
        """Get account by ID"""
        pass

    @abstractmethod
    async def create(self, account: Account) -> Account:
        """Create a new account"""
        pass

    @abstractmethod
    async def update(self, account: Account) -> Account:
        """Update existing account"""
        pass

    @abstractmethod
    async def get_by_active_reset_token(
        self, token_digest: str, now: datetime
    ) -> Optional[Account]:
        """Get account whose reset token matches and expires after now"""
        pass

    @abstractmethod
    async def complete_password_reset(
        self, account_id: UUID, token_digest: str, password_hash: str, now: datetime
    ) -> bool:
        """
        Set the new password hash and clear both reset fields in one
        conditional update.

        Returns False when the token no longer matches or has expired.
        """
        pass

    @abstractmethod
    async def clear_expired_reset_tokens(self, now: datetime) -> int:
        """Clear reset fields on accounts whose reset token has expired"""
        pass
