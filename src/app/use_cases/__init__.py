"""
Use Cases

Organized into domain folders:
- auth/: Registration, login and password reset flows

Import from subdirectories.
"""

from .auth import (
    RegisterUseCase,
    RegisterCommand,
    RegisterResponse,
    AuthenticateUseCase,
    RequestPasswordResetUseCase,
    ConfirmPasswordResetUseCase,
)

__all__ = [
    "RegisterUseCase",
    "RegisterCommand",
    "RegisterResponse",
    "AuthenticateUseCase",
    "RequestPasswordResetUseCase",
    "ConfirmPasswordResetUseCase",
]
