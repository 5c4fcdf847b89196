"""bcrypt password hasher adapter."""

from __future__ import annotations

import secrets
from functools import lru_cache

import bcrypt

from bookshelf.adapters.auth.base import PasswordHasher

# bcrypt only reads the first 72 bytes; newer releases raise instead of truncating.
_BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


@lru_cache(maxsize=8)
def _dummy_hash(rounds: int) -> str:
    return bcrypt.hashpw(_encode(secrets.token_urlsafe(32)), bcrypt.gensalt(rounds=rounds)).decode("ascii")


class BcryptPasswordHasher(PasswordHasher):
    """Auto-salted bcrypt hashes with a configurable work factor."""

    def __init__(self, rounds: int = 12) -> None:
        self._rounds = rounds

    def hash_password(self, password: str) -> str:
        return bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=self._rounds)).decode("ascii")

    def dummy_hash(self) -> str:
        return _dummy_hash(self._rounds)

    def verify_password(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(_encode(password), password_hash.encode("ascii"))
        except (ValueError, TypeError):
            return False


__all__ = ["BcryptPasswordHasher"]
