"""In-memory repositories used by the API scaffold and tests."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

from bookshelf.repositories.base import (
    LIST_ITEM_IMMUTABLE_KEYS,
    BookRecord,
    BooksStore,
    ListItemRecord,
    ListItemsStore,
    UserRecord,
    UsersStore,
)
from bookshelf.schemas.list_item import UNRATED


@dataclass(slots=True)
class InMemoryUsersStore(UsersStore):
    records: dict[str, UserRecord] = field(default_factory=dict)
    write_count: int = 0

    async def insert(self, *, username: str, password_hash: str, token: str) -> UserRecord:
        user = UserRecord(
            id=str(uuid4()),
            username=username,
            password_hash=password_hash,
            token=token,
            created_at=datetime.now(UTC),
        )
        self.records[user.id] = user
        self.write_count += 1
        return user

    async def find_by_username(self, username: str) -> UserRecord | None:
        for user in self.records.values():
            if user.username == username:
                return user
        return None

    async def read_by_id(self, user_id: str) -> UserRecord | None:
        return self.records.get(user_id)

    async def find_by_token(self, token: str) -> UserRecord | None:
        if not token:
            return None
        for user in self.records.values():
            if user.token == token:
                return user
        return None

    async def update_token(self, user_id: str, token: str) -> UserRecord:
        user = self.records[user_id]
        user.token = token
        self.write_count += 1
        return user


@dataclass(slots=True)
class InMemoryBooksStore(BooksStore):
    records: dict[str, BookRecord] = field(default_factory=dict)
    batch_read_count: int = 0

    async def insert(self, book: BookRecord) -> BookRecord:
        self.records[book.id] = book
        return book

    async def read_by_id(self, book_id: str) -> BookRecord | None:
        return self.records.get(book_id)

    async def read_many_by_id(self, book_ids: Iterable[str]) -> list[BookRecord]:
        self.batch_read_count += 1
        return [self.records[book_id] for book_id in book_ids if book_id in self.records]


@dataclass(slots=True)
class InMemoryListItemsStore(ListItemsStore):
    records: dict[str, ListItemRecord] = field(default_factory=dict)
    write_count: int = 0

    async def query(self, *, owner_id: str | None = None, book_id: str | None = None) -> list[ListItemRecord]:
        items = [
            record
            for record in self.records.values()
            if (owner_id is None or record.owner_id == owner_id)
            and (book_id is None or record.book_id == book_id)
        ]
        items.sort(key=lambda record: record.created_at)
        return items

    async def create(self, *, owner_id: str, book_id: str) -> ListItemRecord:
        now = datetime.now(UTC)
        item = ListItemRecord(
            id=str(uuid4()),
            owner_id=owner_id,
            book_id=book_id,
            rating=UNRATED,
            notes="",
            start_date=now,
            finish_date=None,
            created_at=now,
        )
        self.records[item.id] = item
        self.write_count += 1
        return item

    async def read_by_id(self, list_item_id: str) -> ListItemRecord | None:
        return self.records.get(list_item_id)

    async def update(self, list_item_id: str, changes: dict[str, Any]) -> ListItemRecord:
        item = self.records[list_item_id]
        for key, value in changes.items():
            if key in LIST_ITEM_IMMUTABLE_KEYS or not hasattr(item, key):
                continue
            setattr(item, key, value)
        self.write_count += 1
        return item

    async def remove(self, list_item_id: str) -> None:
        self.records.pop(list_item_id, None)
        self.write_count += 1


@dataclass(slots=True)
class InMemoryStore:
    """Simple, deterministic persistence layer for scaffolding and tests."""

    users: InMemoryUsersStore = field(default_factory=InMemoryUsersStore)
    books: InMemoryBooksStore = field(default_factory=InMemoryBooksStore)
    list_items: InMemoryListItemsStore = field(default_factory=InMemoryListItemsStore)
