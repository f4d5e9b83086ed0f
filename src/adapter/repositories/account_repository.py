import functools
from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.account_repository import IAccountRepository
from src.app.repositories.errors import DuplicateEmailError, RepositoryError
from src.domain.entities import Account


def _translate_errors(method):
    """Re-raise SQLAlchemy failures as RepositoryError"""

    @functools.wraps(method)
    async def wrapper(*args, **kwargs):
        try:
            return await method(*args, **kwargs)
        except RepositoryError:
            raise
        except SQLAlchemyError as exc:
            raise RepositoryError(f"{method.__name__} failed") from exc

    return wrapper


class AccountRepository(IAccountRepository):
    """Account repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    @_translate_errors
    async def get_by_email(self, email: str) -> Optional[Account]:
        """Get account by email address"""
        stmt = select(Account).where(Account.email == email)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    @_translate_errors
    async def get_by_id(self, account_id: UUID) -> Optional[Account]:
        """Get account by ID"""
        stmt = select(Account).where(Account.id == account_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    @_translate_errors
    async def create(self, account: Account) -> Account:
        """Create a new account"""
        self.session.add(account)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            await self.session.rollback()
            raise DuplicateEmailError(account.email) from exc
        await self.session.refresh(account)
        return account

    @_translate_errors
    async def update(self, account: Account) -> Account:
        """Update existing account"""
        self.session.add(account)
        await self.session.flush()
        await self.session.refresh(account)
        return account

    @_translate_errors
    async def get_by_active_reset_token(
        self, token_digest: str, now: datetime
    ) -> Optional[Account]:
        """Get account whose reset token matches and expires after now"""
        stmt = select(Account).where(
            Account.reset_token == token_digest,
            Account.reset_token_expires_at > now,
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    @_translate_errors
    async def complete_password_reset(
        self, account_id: UUID, token_digest: str, password_hash: str, now: datetime
    ) -> bool:
        """Swap the password hash and clear the reset fields in one UPDATE"""
        stmt = (
            update(Account)
            .where(
                Account.id == account_id,
                Account.reset_token == token_digest,
                Account.reset_token_expires_at > now,
            )
            .values(
                password_hash=password_hash,
                reset_token=None,
                reset_token_expires_at=None,
            )
            .execution_options(synchronize_session="fetch")
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    @_translate_errors
    async def clear_expired_reset_tokens(self, now: datetime) -> int:
        """Clear reset fields on accounts whose reset token has expired"""
        stmt = (
            update(Account)
            .where(
                Account.reset_token.is_not(None),
                Account.reset_token_expires_at <= now,
            )
            .values(reset_token=None, reset_token_expires_at=None)
            .execution_options(synchronize_session="fetch")
        )
        result = await self.session.execute(stmt)
        return result.rowcount
