"""Book API schemas."""

from bookshelf.schemas.base import ApiModel


class Book(ApiModel):
    id: str
    title: str
    author: str
    cover_image_url: str | None = None
    page_count: int | None = None
    publisher: str | None = None
    synopsis: str | None = None


class BookResponse(ApiModel):
    book: Book
