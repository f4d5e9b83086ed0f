import hashlib
import secrets
from datetime import datetime, timedelta

DEFAULT_RESET_TOKEN_TTL = timedelta(hours=1)


class ResetTokenGenerator:
    """
    Creates single-use password reset secrets.

    Business Rules:
    - 32 random bytes (256 bits), hex encoded
    - Never signed or structured; matched by equality only
    - Stored as SHA-256 digest, plaintext goes to the account holder
    - Expires one hour after issue by default
    """

    def __init__(self, ttl: timedelta = DEFAULT_RESET_TOKEN_TTL):
        self.ttl = ttl

    def generate(self) -> str:
        return secrets.token_hex(32)

    def expiry_from(self, now: datetime) -> datetime:
        return now + self.ttl

    @staticmethod
    def digest(token: str) -> str:
        return hashlib.sha256(token.encode()).hexdigest()
