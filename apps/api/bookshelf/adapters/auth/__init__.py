"""Credential adapters."""

from .base import PasswordHasher, TokenIssuer
from .bcrypt_hasher import BcryptPasswordHasher
from .opaque_tokens import OpaqueTokenIssuer

__all__ = [
    "PasswordHasher",
    "TokenIssuer",
    "BcryptPasswordHasher",
    "OpaqueTokenIssuer",
]
