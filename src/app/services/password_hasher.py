"""
Password hashing and verification.

Uses bcrypt for password hashing with automatic salting
and a configurable work factor.
"""

from typing import Optional

import bcrypt

# bcrypt only reads the first 72 bytes of its input
MAX_PASSWORD_BYTES = 72


class PasswordHasher:
    """
    One-way password hasher.

    Business Rules:
    - Salted bcrypt hash, cost factor 12 by default
    - Empty passwords and passwords over 72 bytes are rejected
    - Verification is constant-time and never raises
    """

    def __init__(self, rounds: int = 12):
        self.rounds = rounds
        self._dummy_hash: Optional[bytes] = None

    def hash(self, password: str) -> str:
        """
        Hash a plaintext password.

        Raises:
            ValueError: password is empty or longer than 72 bytes
        """
        encoded = password.encode("utf-8")
        if not encoded:
            raise ValueError("Password must not be empty")
        if len(encoded) > MAX_PASSWORD_BYTES:
            raise ValueError(
                f"Password must not exceed {MAX_PASSWORD_BYTES} bytes"
            )
        return bcrypt.hashpw(encoded, bcrypt.gensalt(self.rounds)).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Constant-time comparison against a bcrypt hash"""
        if not password or not password_hash:
            return False
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except (ValueError, TypeError):
            return False

    def verify_dummy(self, password: str) -> bool:
        """
        Spend the same work as a real verification against a throwaway hash.

        Used when no account exists so that response timing does not reveal
        whether the email is registered. Always returns False.
        """
        if self._dummy_hash is None:
            self._dummy_hash = bcrypt.hashpw(b"dummy_password", bcrypt.gensalt(self.rounds))
        try:
            bcrypt.checkpw(password.encode("utf-8"), self._dummy_hash)
        except (ValueError, TypeError):
            pass
        return False
