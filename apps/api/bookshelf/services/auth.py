"""Authentication service layer."""

import logging

from starlette.concurrency import run_in_threadpool

from bookshelf.adapters.auth import PasswordHasher, TokenIssuer
from bookshelf.core.logging_safety import safe_log_identifier
from bookshelf.domain.password_policy import is_password_allowed
from bookshelf.errors import ConflictError, ValidationError
from bookshelf.repositories.base import UserRecord, UsersStore
from bookshelf.schemas.auth import User

logger = logging.getLogger(__name__)

_INVALID_CREDENTIALS_MESSAGE = "username or password is invalid"


def _require_credentials(username: str | None, password: str | None) -> tuple[str, str]:
    if not username:
        raise ValidationError("username can't be blank")
    if not password:
        raise ValidationError("password can't be blank")
    return username, password


class AuthService:
    def __init__(self, users: UsersStore, *, hasher: PasswordHasher, tokens: TokenIssuer) -> None:
        self._users = users
        self._hasher = hasher
        self._tokens = tokens

    async def register(self, *, username: str | None, password: str | None) -> User:
        username, password = _require_credentials(username, password)
        if not is_password_allowed(password):
            raise ValidationError("password is not strong enough")

        # Read-then-write: concurrent registrations of one username can both pass this check.
        if await self._users.find_by_username(username) is not None:
            raise ConflictError("username taken")

        password_hash = await run_in_threadpool(self._hasher.hash_password, password)
        record = await self._users.insert(
            username=username,
            password_hash=password_hash,
            token=self._tokens.issue_token(),
        )
        logger.info(
            "auth.registered user_id=%s username=%s",
            safe_log_identifier(record.id, prefix="uid"),
            safe_log_identifier(username, prefix="uname"),
        )
        return self._to_user(record)

    async def login(self, *, username: str | None, password: str | None) -> User:
        username, password = _require_credentials(username, password)

        record = await self._users.find_by_username(username)
        # Unknown usernames still pay for one bcrypt check so both failures take as long.
        if record is None:
            password_hash = await run_in_threadpool(self._hasher.dummy_hash)
        else:
            password_hash = record.password_hash
        verified = await run_in_threadpool(self._hasher.verify_password, password, password_hash)
        if record is None or not verified:
            logger.warning(
                "auth.login_rejected username=%s",
                safe_log_identifier(username, prefix="uname"),
            )
            raise ValidationError(_INVALID_CREDENTIALS_MESSAGE)

        record = await self._users.update_token(record.id, self._tokens.issue_token())
        logger.info("auth.logged_in user_id=%s", safe_log_identifier(record.id, prefix="uid"))
        return self._to_user(record)

    async def resolve_token(self, token: str) -> User | None:
        """Map a bearer token back to its user; unknown tokens yield None."""
        if not token:
            return None
        record = await self._users.find_by_token(token)
        if record is None:
            return None
        return self._to_user(record)

    @staticmethod
    def _to_user(record: UserRecord) -> User:
        return User(id=record.id, username=record.username, token=record.token)
