"""List item routes."""

from typing import Annotated

from fastapi import APIRouter, Depends

from bookshelf.repositories.base import ListItemRecord
from bookshelf.routes.dependencies import get_current_user, get_list_item_service, get_owned_list_item
from bookshelf.schemas.auth import User
from bookshelf.schemas.error import ErrorResponse
from bookshelf.schemas.list_item import (
    CreateListItemRequest,
    DeleteListItemResponse,
    ListItemResponse,
    ListItemsResponse,
    UpdateListItemRequest,
)
from bookshelf.services.list_items import ListItemService

router = APIRouter(prefix="/list-items", tags=["List Items"])

_ITEM_ERRORS = {
    401: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
}


@router.get(
    "",
    response_model=ListItemsResponse,
    responses={401: {"model": ErrorResponse}},
)
async def list_list_items(
    user: Annotated[User, Depends(get_current_user)],
    service: Annotated[ListItemService, Depends(get_list_item_service)],
) -> ListItemsResponse:
    return ListItemsResponse(list_items=await service.list_list_items(owner_id=user.id))


@router.post(
    "",
    response_model=ListItemResponse,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
)
async def create_list_item(
    payload: CreateListItemRequest,
    user: Annotated[User, Depends(get_current_user)],
    service: Annotated[ListItemService, Depends(get_list_item_service)],
) -> ListItemResponse:
    list_item = await service.create_list_item(owner_id=user.id, book_id=payload.book_id)
    return ListItemResponse(list_item=list_item)


@router.get("/{listItemId}", response_model=ListItemResponse, responses=_ITEM_ERRORS)
async def get_list_item(
    list_item: Annotated[ListItemRecord, Depends(get_owned_list_item)],
    service: Annotated[ListItemService, Depends(get_list_item_service)],
) -> ListItemResponse:
    return ListItemResponse(list_item=await service.get_list_item(list_item=list_item))


@router.put("/{listItemId}", response_model=ListItemResponse, responses=_ITEM_ERRORS)
async def update_list_item(
    payload: UpdateListItemRequest,
    list_item: Annotated[ListItemRecord, Depends(get_owned_list_item)],
    service: Annotated[ListItemService, Depends(get_list_item_service)],
) -> ListItemResponse:
    updated = await service.update_list_item(
        list_item=list_item,
        changes=payload.model_dump(exclude_unset=True),
    )
    return ListItemResponse(list_item=updated)


@router.delete("/{listItemId}", response_model=DeleteListItemResponse, responses=_ITEM_ERRORS)
async def delete_list_item(
    list_item: Annotated[ListItemRecord, Depends(get_owned_list_item)],
    service: Annotated[ListItemService, Depends(get_list_item_service)],
) -> DeleteListItemResponse:
    await service.delete_list_item(list_item=list_item)
    return DeleteListItemResponse()
