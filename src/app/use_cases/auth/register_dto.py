"""
Register Use Case DTOs (Data Transfer Objects)

Command/Response pattern for clean architecture separation:
- RegisterCommand: Input to use case (validated business intent)
- RegisterResponse: Output from use case (structured result)
"""

from pydantic import BaseModel, Field, field_validator


class RegisterCommand(BaseModel):
    """
    Register command - represents validated registration intent

    Created by API layer after request validation passes.
    Name and email are trimmed; the password is kept verbatim.
    """

    name: str = Field(..., min_length=1, max_length=32)
    email: str = Field(..., min_length=1)
    password: str

    @field_validator("name", "email", mode="before")
    @classmethod
    def strip_whitespace(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value


class AccountInfo(BaseModel):
    """Public account identity (never includes the password hash)"""

    id: str
    name: str
    email: str


class RegisterResponse(BaseModel):
    """Register response - structured output from use case"""

    message: str
    account: AccountInfo
