"""Book routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from bookshelf.routes.dependencies import get_book_service, get_current_user
from bookshelf.schemas.auth import User
from bookshelf.schemas.book import BookResponse
from bookshelf.schemas.error import ErrorResponse
from bookshelf.services.books import BookService

router = APIRouter(prefix="/books", tags=["Books"])


@router.get(
    "/{bookId}",
    response_model=BookResponse,
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def get_book(
    book_id: Annotated[str, Path(alias="bookId")],
    _user: Annotated[User, Depends(get_current_user)],
    service: Annotated[BookService, Depends(get_book_service)],
) -> BookResponse:
    return BookResponse(book=await service.get_book(book_id=book_id))
