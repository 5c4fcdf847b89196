"""Credential primitive interfaces."""

from abc import ABC, abstractmethod


class PasswordHasher(ABC):
    """One-way, salted password hashing."""

    @abstractmethod
    def hash_password(self, password: str) -> str:
        """Return a self-describing hash suitable for storage."""

    @abstractmethod
    def dummy_hash(self) -> str:
        """Return a hash of no real password, at the same cost as stored hashes."""

    @abstractmethod
    def verify_password(self, password: str, password_hash: str) -> bool:
        """Check a candidate password; malformed hashes verify as False."""


class TokenIssuer(ABC):
    """Issues opaque bearer tokens; only the users store can map one back to a user."""

    @abstractmethod
    def issue_token(self) -> str:
        """Return a fresh, unguessable token."""


__all__ = ["PasswordHasher", "TokenIssuer"]
