"""List item service layer.

Ownership of single items is checked by ``AuthorizationGuard`` before any
of the item-scoped methods here run; they receive the already-loaded record.
"""

import logging
from typing import Any

from bookshelf.core.logging_safety import safe_log_identifier
from bookshelf.errors import ConflictError, ValidationError
from bookshelf.repositories.base import (
    LIST_ITEM_IMMUTABLE_KEYS,
    BookRecord,
    BooksStore,
    ListItemRecord,
    ListItemsStore,
)
from bookshelf.schemas.list_item import ListItem
from bookshelf.services.books import to_book

logger = logging.getLogger(__name__)

_NULLABLE_KEYS = frozenset({"start_date", "finish_date"})


class ListItemService:
    def __init__(self, list_items: ListItemsStore, books: BooksStore) -> None:
        self._list_items = list_items
        self._books = books

    async def get_list_item(self, *, list_item: ListItemRecord) -> ListItem:
        book = await self._books.read_by_id(list_item.book_id)
        return self._to_list_item(list_item, book)

    async def list_list_items(self, *, owner_id: str) -> list[ListItem]:
        records = await self._list_items.query(owner_id=owner_id)
        if not records:
            return []

        # One batched lookup for every referenced book, first-seen order.
        book_ids = list(dict.fromkeys(record.book_id for record in records))
        books = {book.id: book for book in await self._books.read_many_by_id(book_ids)}
        return [self._to_list_item(record, books.get(record.book_id)) for record in records]

    async def create_list_item(self, *, owner_id: str, book_id: str | None) -> ListItem:
        if not book_id:
            raise ValidationError("No bookId provided")

        # Advisory only: two concurrent creates for one pair can both see no match.
        existing = await self._list_items.query(owner_id=owner_id, book_id=book_id)
        if existing:
            raise ConflictError(
                f"User {owner_id} already has a list item for the book with the ID {book_id}"
            )

        record = await self._list_items.create(owner_id=owner_id, book_id=book_id)
        logger.info(
            "list_item.created list_item_id=%s owner_id=%s",
            record.id,
            safe_log_identifier(owner_id, prefix="uid"),
        )
        book = await self._books.read_by_id(book_id)
        return self._to_list_item(record, book)

    async def update_list_item(self, *, list_item: ListItemRecord, changes: dict[str, Any]) -> ListItem:
        applied = {
            key: value
            for key, value in changes.items()
            if key not in LIST_ITEM_IMMUTABLE_KEYS and (value is not None or key in _NULLABLE_KEYS)
        }
        record = await self._list_items.update(list_item.id, applied)
        logger.info("list_item.updated list_item_id=%s fields=%s", record.id, ",".join(sorted(applied)))
        book = await self._books.read_by_id(record.book_id)
        return self._to_list_item(record, book)

    async def delete_list_item(self, *, list_item: ListItemRecord) -> None:
        await self._list_items.remove(list_item.id)
        logger.info("list_item.deleted list_item_id=%s", list_item.id)

    @staticmethod
    def _to_list_item(record: ListItemRecord, book: BookRecord | None) -> ListItem:
        return ListItem(
            id=record.id,
            owner_id=record.owner_id,
            book_id=record.book_id,
            rating=record.rating,
            notes=record.notes,
            start_date=record.start_date,
            finish_date=record.finish_date,
            book=to_book(book) if book is not None else None,
        )
