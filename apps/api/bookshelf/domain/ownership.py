"""Ownership rules for user-owned list items."""

from bookshelf.errors import ForbiddenError, NotFoundError
from bookshelf.repositories.base import ListItemRecord


def ensure_list_item_access(
    *,
    user_id: str,
    list_item_id: str,
    list_item: ListItemRecord | None,
) -> ListItemRecord:
    """Validate that a loaded list item exists and belongs to the acting user."""
    if list_item is None:
        raise NotFoundError(f"No list item was found with the id of {list_item_id}")

    if list_item.owner_id != user_id:
        raise ForbiddenError(
            f"User with id {user_id} is not authorized to access the list item {list_item.id}"
        )

    return list_item
