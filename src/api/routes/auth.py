from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field, field_validator

from config import ApplicationConfig
from src.api.error import ClientError, ServerError
from src.app.services.password_hasher import PasswordHasher
from src.app.services.reset_notifier import ResetNotifier
from src.app.services.reset_token_generator import ResetTokenGenerator
from src.app.services.token_service import TokenService
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    RegisterCommand,
    RegisterResponse,
    RegisterUseCase,
    AuthenticateUseCase,
    RequestPasswordResetUseCase,
    ConfirmPasswordResetUseCase,
    LoginResponse,
    RequestPasswordResetResponse,
    ConfirmPasswordResetResponse,
)
from src.depends import (
    get_password_hasher,
    get_reset_notifier,
    get_reset_token_generator,
    get_token_service,
    get_unit_of_work,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


class SignupRequest(BaseModel):
    """
    Signup HTTP request payload

    Validates incoming HTTP request before converting to RegisterCommand.
    API layer responsibility: HTTP validation and serialization.
    """

    name: str = Field(..., min_length=1, max_length=32, description="Display name")
    email: EmailStr = Field(..., description="Account email address")
    password: str = Field(..., description="Password (8+ chars, at most 72 bytes)")

    @field_validator("name", "email", mode="before")
    @classmethod
    def strip_whitespace(cls, value):
        return value.strip() if isinstance(value, str) else value


@router.post(
    "/signup", status_code=status.HTTP_201_CREATED, response_model=RegisterResponse
)
async def signup(
    request: SignupRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: PasswordHasher = Depends(get_password_hasher),
):
    """
    Account Signup

    Creates a new account. Returns the public account identity.

    Raises:
        - 400 Bad Request: Email already registered or password rejected
        - 422 Unprocessable Entity: Invalid input (handled by FastAPI)
        - 500 Internal Server Error: Storage failure
    """
    command = RegisterCommand(
        name=request.name, email=request.email, password=request.password
    )

    use_case = RegisterUseCase(uow, hasher)
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code in ("DUPLICATE_ACCOUNT", "INVALID_PASSWORD"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value


class LoginRequest(BaseModel):
    """Login HTTP request payload"""

    email: EmailStr = Field(..., description="Account email address")
    password: str = Field(..., description="Account password")

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, value):
        return value.strip() if isinstance(value, str) else value


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def login(
    request: LoginRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
):
    """
    Account Login

    Authenticates the account and returns a one-hour bearer token.

    Raises:
        - 400 Bad Request: Invalid credentials (same for unknown email and wrong password)
        - 500 Internal Server Error: Storage failure
    """
    use_case = AuthenticateUseCase(uow, hasher, tokens)
    result = await use_case.execute(request.email, request.password)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value


class ForgotPasswordRequest(BaseModel):
    """Forgot password HTTP request payload"""

    email: EmailStr = Field(..., description="Account email address")

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, value):
        return value.strip() if isinstance(value, str) else value


@router.post(
    "/forgot-password",
    status_code=status.HTTP_200_OK,
    response_model=RequestPasswordResetResponse,
)
async def forgot_password(
    request: ForgotPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    reset_tokens: ResetTokenGenerator = Depends(get_reset_token_generator),
    notifier: ResetNotifier = Depends(get_reset_notifier),
):
    """
    Request Password Reset

    Generates a one-hour reset token and hands it to the reset notifier.

    Returns:
        - 200 OK: Reset token issued (or generic success for unknown emails)
        - 404 Not Found: Unknown email, only when RESET_REVEALS_UNKNOWN_EMAIL is set
        - 500 Internal Server Error: Storage failure
    """
    use_case = RequestPasswordResetUseCase(
        uow,
        reset_tokens,
        notifier,
        reveal_unknown_email=ApplicationConfig.RESET_REVEALS_UNKNOWN_EMAIL,
    )
    result = await use_case.execute(request.email)

    if result.is_err():
        error = result.error
        if error.code == "ACCOUNT_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


class ResetPasswordRequest(BaseModel):
    """Reset password HTTP request payload"""

    reset_token: str = Field(..., min_length=1, description="Password reset token")
    new_password: str = Field(..., description="New password (8+ chars, at most 72 bytes)")


@router.post(
    "/reset-password",
    status_code=status.HTTP_200_OK,
    response_model=ConfirmPasswordResetResponse,
)
async def reset_password(
    request: ResetPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: PasswordHasher = Depends(get_password_hasher),
    reset_tokens: ResetTokenGenerator = Depends(get_reset_token_generator),
):
    """
    Confirm Password Reset

    Consumes the reset token and sets the new password.

    Raises:
        - 400 Bad Request: Invalid, expired or already used token; password rejected
        - 500 Internal Server Error: Storage failure
    """
    use_case = ConfirmPasswordResetUseCase(uow, hasher, reset_tokens)
    result = await use_case.execute(request.reset_token, request.new_password)

    if result.is_err():
        error = result.error
        if error.code in ("INVALID_OR_EXPIRED_RESET_TOKEN", "INVALID_PASSWORD"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value
