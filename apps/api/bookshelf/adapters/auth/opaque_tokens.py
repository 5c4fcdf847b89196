"""Random opaque bearer tokens."""

import secrets

from bookshelf.adapters.auth.base import TokenIssuer


class OpaqueTokenIssuer(TokenIssuer):
    """URL-safe random tokens carrying no claims.

    A token means nothing on its own; it identifies a user only while the
    users store holds it on that user's record.
    """

    def __init__(self, nbytes: int = 32) -> None:
        self._nbytes = nbytes

    def issue_token(self) -> str:
        return secrets.token_urlsafe(self._nbytes)


__all__ = ["OpaqueTokenIssuer"]
