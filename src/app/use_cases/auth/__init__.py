"""
Authentication Use Cases

All authentication-related business logic.
"""

from .register_use_case import RegisterUseCase
from .register_dto import AccountInfo, RegisterCommand, RegisterResponse
from .authenticate_use_case import AuthenticateUseCase
from .request_password_reset_use_case import RequestPasswordResetUseCase
from .confirm_password_reset_use_case import ConfirmPasswordResetUseCase
from .dtos import (
    LoginResponse,
    RequestPasswordResetResponse,
    ConfirmPasswordResetResponse,
)

__all__ = [
    # Use Cases
    "RegisterUseCase",
    "AuthenticateUseCase",
    "RequestPasswordResetUseCase",
    "ConfirmPasswordResetUseCase",
    # DTOs - Commands
    "RegisterCommand",
    # DTOs - Responses
    "RegisterResponse",
    "LoginResponse",
    "RequestPasswordResetResponse",
    "ConfirmPasswordResetResponse",
    # DTOs - Nested Models
    "AccountInfo",
]
