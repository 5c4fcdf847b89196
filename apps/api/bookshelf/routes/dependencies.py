"""Dependency wiring for routes."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import Depends, Path, Request, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from bookshelf.adapters.auth import (
    BcryptPasswordHasher,
    OpaqueTokenIssuer,
    PasswordHasher,
    TokenIssuer,
)
from bookshelf.core.config import Settings, get_settings
from bookshelf.core.logging_safety import request_log_fields, safe_log_identifier
from bookshelf.errors import ApiError
from bookshelf.repositories.base import ListItemRecord
from bookshelf.repositories.memory import InMemoryStore
from bookshelf.schemas.auth import User
from bookshelf.services.auth import AuthService
from bookshelf.services.authorization import AuthorizationGuard
from bookshelf.services.books import BookService
from bookshelf.services.list_items import ListItemService

bearer_scheme = HTTPBearer(auto_error=False, scheme_name="bearerAuth")
logger = logging.getLogger(__name__)


def get_store(request: Request) -> InMemoryStore:
    return request.app.state.store


def get_password_hasher(settings: Annotated[Settings, Depends(get_settings)]) -> PasswordHasher:
    return BcryptPasswordHasher(rounds=settings.bcrypt_rounds)


def get_token_issuer(settings: Annotated[Settings, Depends(get_settings)]) -> TokenIssuer:
    return OpaqueTokenIssuer(nbytes=settings.token_bytes)


def get_auth_service(
    store: Annotated[InMemoryStore, Depends(get_store)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
    tokens: Annotated[TokenIssuer, Depends(get_token_issuer)],
) -> AuthService:
    return AuthService(store.users, hasher=hasher, tokens=tokens)


def get_authorization_guard(
    store: Annotated[InMemoryStore, Depends(get_store)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> AuthorizationGuard:
    return AuthorizationGuard(auth_service, store.list_items)


def get_list_item_service(store: Annotated[InMemoryStore, Depends(get_store)]) -> ListItemService:
    return ListItemService(store.list_items, store.books)


def get_book_service(store: Annotated[InMemoryStore, Depends(get_store)]) -> BookService:
    return BookService(store.books)


async def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Security(bearer_scheme)],
    guard: Annotated[AuthorizationGuard, Depends(get_authorization_guard)],
) -> User:
    """Resolve the bearer token and attach the user to request context."""
    correlation_id, method, path = request_log_fields(request)
    token = credentials.credentials if credentials is not None else None
    try:
        user = await guard.identify(token)
    except ApiError:
        logger.warning(
            "auth.rejected correlation_id=%s method=%s path=%s reason=%s",
            correlation_id,
            method,
            path,
            "missing_bearer" if token is None else "unknown_token",
        )
        raise

    logger.info(
        "auth.accepted correlation_id=%s method=%s path=%s user_id=%s",
        correlation_id,
        method,
        path,
        safe_log_identifier(user.id, prefix="uid"),
    )
    request.state.user = user
    return user


async def get_owned_list_item(
    request: Request,
    list_item_id: Annotated[str, Path(alias="listItemId")],
    user: Annotated[User, Depends(get_current_user)],
    guard: Annotated[AuthorizationGuard, Depends(get_authorization_guard)],
) -> ListItemRecord:
    """Load the addressed list item, failing 404/403 before the route body runs."""
    try:
        list_item = await guard.load_owned_list_item(user=user, list_item_id=list_item_id)
    except ApiError as exc:
        correlation_id, method, path = request_log_fields(request)
        logger.warning(
            "list_item.access_denied correlation_id=%s method=%s path=%s user_id=%s status=%s",
            correlation_id,
            method,
            path,
            safe_log_identifier(user.id, prefix="uid"),
            exc.status_code,
        )
        raise

    request.state.list_item = list_item
    return list_item
