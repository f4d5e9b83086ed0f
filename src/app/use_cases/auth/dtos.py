"""
Authentication Use Case DTOs (Data Transfer Objects)

Response classes for the login and password reset flows.
"""

from pydantic import BaseModel


class LoginResponse(BaseModel):
    """Response for authenticate use case"""

    message: str
    token: str
    token_type: str = "bearer"
    expires_in: int


class RequestPasswordResetResponse(BaseModel):
    """Response for request password reset use case"""

    status: str
    message: str


class ConfirmPasswordResetResponse(BaseModel):
    """Response for confirm password reset use case"""

    status: str
    message: str
