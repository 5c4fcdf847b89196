"""List item API schemas."""

from datetime import datetime

from pydantic import Field

from bookshelf.schemas.base import ApiModel
from bookshelf.schemas.book import Book

UNRATED = -1


class CreateListItemRequest(ApiModel):
    book_id: str | None = None


class UpdateListItemRequest(ApiModel):
    """Patchable reading-progress fields. Unknown keys (``id``, ``ownerId``...) are ignored."""

    rating: int | None = Field(default=None, ge=UNRATED, le=5)
    notes: str | None = None
    start_date: datetime | None = None
    finish_date: datetime | None = None


class ListItem(ApiModel):
    id: str
    owner_id: str
    book_id: str
    rating: int = UNRATED
    notes: str = ""
    start_date: datetime | None = None
    finish_date: datetime | None = None
    book: Book | None = None


class ListItemResponse(ApiModel):
    list_item: ListItem


class ListItemsResponse(ApiModel):
    list_items: list[ListItem]


class DeleteListItemResponse(ApiModel):
    success: bool = True
