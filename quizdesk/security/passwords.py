"""
Password hashing.

bcrypt digests embed their own salt and cost factor, so callers only ever
deal with the plaintext and the stored digest string.
"""

from __future__ import annotations

from typing import Protocol

import bcrypt


class PasswordHasher(Protocol):
    """Protocol for password hashers."""

    def hash(self, plaintext: str) -> str:
        """Return a salted digest of the plaintext."""
        ...

    def verify(self, plaintext: str, digest: str) -> bool:
        """Check a plaintext against a stored digest."""
        ...


class BcryptPasswordHasher:
    """PasswordHasher backed by bcrypt."""

    def __init__(self, rounds: int = 12):
        self.rounds = rounds

    def hash(self, plaintext: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(_encode(plaintext), salt).decode("utf-8")

    def verify(self, plaintext: str, digest: str) -> bool:
        try:
            return bcrypt.checkpw(_encode(plaintext), digest.encode("utf-8"))
        except ValueError:
            # Malformed digest in the roster
            return False


def _encode(plaintext: str) -> bytes:
    # bcrypt only considers the first 72 bytes and newer releases reject longer input
    return plaintext.encode("utf-8")[:72]
