import logging
from datetime import timedelta
from typing import Optional

from fastapi import Depends, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.logging_reset_notifier import LoggingResetNotifier
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.app.services.password_hasher import PasswordHasher
from src.app.services.reset_notifier import ResetNotifier
from src.app.services.reset_token_generator import ResetTokenGenerator
from src.app.services.token_service import AccessClaims, TokenService
from src.libs.result import Error

logger = logging.getLogger(__name__)

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer(auto_error=False)

_password_hasher = PasswordHasher(rounds=ApplicationConfig.BCRYPT_ROUNDS)
_reset_token_generator = ResetTokenGenerator(
    ttl=timedelta(minutes=ApplicationConfig.RESET_TOKEN_TTL_MINUTES)
)
_reset_notifier = LoggingResetNotifier()


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_password_hasher() -> PasswordHasher:
    return _password_hasher


def get_token_service() -> TokenService:
    return TokenService(
        secret=ApplicationConfig.JWT_SECRET,
        algorithm=ApplicationConfig.JWT_ALGORITHM,
        ttl=timedelta(minutes=ApplicationConfig.ACCESS_TOKEN_TTL_MINUTES),
    )


def get_reset_token_generator() -> ResetTokenGenerator:
    return _reset_token_generator


def get_reset_notifier() -> ResetNotifier:
    return _reset_notifier


async def get_current_account(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    tokens: TokenService = Depends(get_token_service),
) -> AccessClaims:
    """
    Dependency to extract and verify the bearer token from the Authorization header.

    Args:
        credentials: Bearer token from Authorization header, None when the
            header is missing or uses another scheme

    Returns:
        Verified claims (account_id, email), also stored on request.state.account

    Raises:
        ClientError: 401 if no bearer token was sent,
            403 if the token is malformed, forged or expired
    """
    if credentials is None:
        raise ClientError(
            Error("UNAUTHENTICATED", "Access denied. No valid token provided."),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    result = tokens.verify(credentials.credentials)
    if result.is_err():
        # Reason stays in the server log; the client gets one generic answer
        logger.warning(
            "Bearer token rejected (%s): %s", result.error.code, result.error.message
        )
        raise ClientError(
            Error("INVALID_TOKEN", "Invalid or expired token"),
            status_code=status.HTTP_403_FORBIDDEN,
        )

    request.state.account = result.value
    return result.value
