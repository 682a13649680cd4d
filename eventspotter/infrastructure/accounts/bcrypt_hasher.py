"""
Adapter: bcrypt password hashing.

bcrypt is CPU-bound, so both operations run in a worker thread to
keep the event loop responsive.
"""

import asyncio

import bcrypt

from eventspotter.domain.accounts.ports import PasswordHasher


class BcryptPasswordHasher(PasswordHasher):
    """PasswordHasher backed by the bcrypt library."""

    def __init__(self, rounds: int = 10) -> None:
        self._rounds = rounds

    def _hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    @staticmethod
    def _verify(password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except ValueError:
            # Malformed stored hash.
            return False

    async def hash(self, password: str) -> str:
        return await asyncio.to_thread(self._hash, password)

    async def verify(self, password: str, password_hash: str) -> bool:
        return await asyncio.to_thread(self._verify, password, password_hash)
