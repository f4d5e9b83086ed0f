from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.app.services.password_hasher import PasswordHasher
from src.app.services.reset_token_generator import ResetTokenGenerator
from src.app.services.token_service import TokenService


class FixedClock:
    """Settable clock returning naive UTC datetimes"""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock():
    return FixedClock(datetime(2024, 5, 1, 12, 0, 0))


@pytest.fixture
def hasher():
    # Lowest bcrypt cost keeps the suite fast
    return PasswordHasher(rounds=4)


@pytest.fixture
def token_service(clock):
    return TokenService(secret="unit-test-secret", clock=clock)


@pytest.fixture
def reset_tokens():
    return ResetTokenGenerator()


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.accounts = MagicMock()
    uow.accounts.get_by_email = AsyncMock(return_value=None)
    uow.accounts.get_by_id = AsyncMock(return_value=None)
    uow.accounts.create = AsyncMock(side_effect=lambda account: account)
    uow.accounts.update = AsyncMock(side_effect=lambda account: account)
    uow.accounts.get_by_active_reset_token = AsyncMock(return_value=None)
    uow.accounts.complete_password_reset = AsyncMock(return_value=True)
    uow.accounts.clear_expired_reset_tokens = AsyncMock(return_value=0)
    return uow
