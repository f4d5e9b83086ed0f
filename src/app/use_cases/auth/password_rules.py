from src.app.services.password_hasher import MAX_PASSWORD_BYTES
from src.libs.result import Error, Result, Return

MIN_PASSWORD_LENGTH = 8


def validate_password(password: str) -> Result[None]:
    """
    Validate password length.

    Returns:
        Result with None if valid, or Error(INVALID_PASSWORD)
    """
    if len(password) < MIN_PASSWORD_LENGTH:
        return Return.err(
            Error(
                "INVALID_PASSWORD",
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long",
            )
        )

    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        return Return.err(
            Error(
                "INVALID_PASSWORD",
                f"Password must not exceed {MAX_PASSWORD_BYTES} bytes",
            )
        )

    return Return.ok(None)
