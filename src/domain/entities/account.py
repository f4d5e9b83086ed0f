"""
Account Entity

Represents a person who can sign in with email and password.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.libs.clock import utc_now


class Account(SQLModel, table=True):
    """
    Account entity - identity record keyed by unique email.

    Business Rules:
    - Email must be unique across all accounts (case-sensitive as stored)
    - Name is required, at most 32 characters
    - Password stored as bcrypt hash, never as plaintext
    - reset_token holds the SHA-256 digest of a pending reset secret
    - reset_token and reset_token_expires_at are set and cleared together
    - Accounts are never deleted
    """

    __tablename__ = "accounts"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=32)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    # Password reset (pending only while both are set)
    reset_token: Optional[str] = Field(default=None, max_length=64)
    reset_token_expires_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime, nullable=True)
    )

    created_at: datetime = Field(
        default_factory=utc_now, sa_column=Column(DateTime)
    )

    __table_args__ = (Index("idx_account_reset_token", "reset_token"),)

    def begin_password_reset(self, token_digest: str, expires_at: datetime) -> None:
        self.reset_token = token_digest
        self.reset_token_expires_at = expires_at

    def clear_password_reset(self) -> None:
        self.reset_token = None
        self.reset_token_expires_at = None

    def complete_password_reset(self, password_hash: str) -> None:
        self.password_hash = password_hash
        self.clear_password_reset()

    def has_pending_reset(self, now: datetime) -> bool:
        """True while a reset token is stored and has not yet expired"""
        return (
            self.reset_token is not None
            and self.reset_token_expires_at is not None
            and now < self.reset_token_expires_at
        )
