"""Persistence interfaces consumed by the services.

Every operation is async so a network-backed store can be dropped in
without touching the service layer. Uniqueness (usernames, one list item
per owner/book) is not enforced here; callers check before writing.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from typing import Any

# Identity fields a list item update never overwrites.
LIST_ITEM_IMMUTABLE_KEYS = frozenset({"id", "owner_id", "book_id", "created_at"})


@dataclass(slots=True)
class UserRecord:
    id: str
    username: str
    password_hash: str
    token: str
    created_at: datetime


@dataclass(slots=True)
class BookRecord:
    id: str
    title: str
    author: str
    cover_image_url: str | None = None
    page_count: int | None = None
    publisher: str | None = None
    synopsis: str | None = None


@dataclass(slots=True)
class ListItemRecord:
    id: str
    owner_id: str
    book_id: str
    rating: int
    notes: str
    start_date: datetime | None
    finish_date: datetime | None
    created_at: datetime


class UsersStore(ABC):
    @abstractmethod
    async def insert(self, *, username: str, password_hash: str, token: str) -> UserRecord:
        """Persist a new user and return the stored record."""

    @abstractmethod
    async def find_by_username(self, username: str) -> UserRecord | None:
        """Exact, case-sensitive username match."""

    @abstractmethod
    async def read_by_id(self, user_id: str) -> UserRecord | None: ...

    @abstractmethod
    async def find_by_token(self, token: str) -> UserRecord | None: ...

    @abstractmethod
    async def update_token(self, user_id: str, token: str) -> UserRecord:
        """Replace the user's token; the previous token stops resolving."""


class BooksStore(ABC):
    @abstractmethod
    async def insert(self, book: BookRecord) -> BookRecord: ...

    @abstractmethod
    async def read_by_id(self, book_id: str) -> BookRecord | None: ...

    @abstractmethod
    async def read_many_by_id(self, book_ids: Iterable[str]) -> list[BookRecord]:
        """Resolve a batch of ids in one call; unknown ids are skipped."""


class ListItemsStore(ABC):
    @abstractmethod
    async def query(self, *, owner_id: str | None = None, book_id: str | None = None) -> list[ListItemRecord]:
        """Return items matching every provided filter, oldest first."""

    @abstractmethod
    async def create(self, *, owner_id: str, book_id: str) -> ListItemRecord: ...

    @abstractmethod
    async def read_by_id(self, list_item_id: str) -> ListItemRecord | None: ...

    @abstractmethod
    async def update(self, list_item_id: str, changes: dict[str, Any]) -> ListItemRecord:
        """Apply ``changes``, skipping ``LIST_ITEM_IMMUTABLE_KEYS``."""

    @abstractmethod
    async def remove(self, list_item_id: str) -> None: ...


__all__ = [
    "LIST_ITEM_IMMUTABLE_KEYS",
    "BookRecord",
    "BooksStore",
    "ListItemRecord",
    "ListItemsStore",
    "UserRecord",
    "UsersStore",
]
