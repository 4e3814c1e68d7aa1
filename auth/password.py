"""
Password hashing and verification.

Uses bcrypt for password hashing with automatic
salting and configurable work factor.

Accounts created by the earlier deployment carry unsalted SHA-256 hex
digests.  ``verify`` still accepts those so existing users can log in, and
``needs_rehash`` reports them; new digests are always bcrypt.
"""

from __future__ import annotations

import hashlib
import hmac
import re
from functools import cached_property

import bcrypt

# bcrypt only reads the first 72 bytes of its input.
_BCRYPT_MAX_BYTES = 72
_LEGACY_SHA256 = re.compile(r"^[0-9a-f]{64}$")


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


class PasswordHasher:
    """One-way transform of plaintext passwords into stored digests."""

    def __init__(self, rounds: int = 12) -> None:
        self.rounds = rounds

    @cached_property
    def dummy_hash(self) -> str:
        """A valid digest of no real account, for equal-time failed lookups."""
        return self.hash("")

    def hash(self, password: str) -> str:
        """Hash a password with bcrypt (auto-salted)."""
        return bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=self.rounds)).decode()

    def verify(self, password: str, password_hash: str) -> bool:
        """Constant-time comparison against a stored digest."""
        if _LEGACY_SHA256.match(password_hash):
            candidate = hashlib.sha256(password.encode("utf-8")).hexdigest()
            return hmac.compare_digest(candidate, password_hash)
        try:
            return bcrypt.checkpw(_encode(password), password_hash.encode())
        except (ValueError, TypeError):
            return False

    def needs_rehash(self, password_hash: str) -> bool:
        """True for legacy digests and bcrypt digests below the current work factor."""
        if _LEGACY_SHA256.match(password_hash):
            return True
        parts = password_hash.split("$")
        # $2b$12$<salt+hash>
        if len(parts) != 4 or not parts[2].isdigit():
            return True
        return int(parts[2]) < self.rounds
