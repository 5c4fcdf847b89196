"""Book service layer."""

from bookshelf.errors import NotFoundError
from bookshelf.repositories.base import BookRecord, BooksStore
from bookshelf.schemas.book import Book


def to_book(record: BookRecord) -> Book:
    return Book(
        id=record.id,
        title=record.title,
        author=record.author,
        cover_image_url=record.cover_image_url,
        page_count=record.page_count,
        publisher=record.publisher,
        synopsis=record.synopsis,
    )


class BookService:
    def __init__(self, books: BooksStore) -> None:
        self._books = books

    async def get_book(self, *, book_id: str) -> Book:
        record = await self._books.read_by_id(book_id)
        if record is None:
            raise NotFoundError(f"No book was found with the id of {book_id}")
        return to_book(record)
