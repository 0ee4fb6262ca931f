"""
Password hashing with bcrypt.

bcrypt output is self-describing ($2b$<cost>$<salt><digest>), so
verification needs no separately stored salt. Hashing cost is adaptive via
the configured round count (~60ms at cost 10).
"""

import asyncio

import bcrypt

# bcrypt only consumes the first 72 bytes of input
BCRYPT_MAX_PASSWORD_BYTES = 72


class PasswordHasher:
    """Salted one-way password transform."""

    def __init__(self, rounds: int = 10):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        """
        Hash a plaintext password with a fresh random salt.

        Raises:
            ValueError: Password exceeds the bcrypt input limit
        """
        encoded = password.encode("utf-8")
        if len(encoded) > BCRYPT_MAX_PASSWORD_BYTES:
            raise ValueError(f"Password exceeds {BCRYPT_MAX_PASSWORD_BYTES} bytes")
        return bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=self.rounds)).decode("ascii")

    def verify(self, password: str, password_hash: str) -> bool:
        """Constant-time check of a plaintext password against a stored hash."""
        encoded = password.encode("utf-8")
        if len(encoded) > BCRYPT_MAX_PASSWORD_BYTES:
            return False
        return bcrypt.checkpw(encoded, password_hash.encode("ascii"))

    async def hash_async(self, password: str) -> str:
        """hash() in a worker thread so the event loop keeps serving requests."""
        return await asyncio.to_thread(self.hash, password)

    async def verify_async(self, password: str, password_hash: str) -> bool:
        """verify() in a worker thread."""
        return await asyncio.to_thread(self.verify, password, password_hash)
