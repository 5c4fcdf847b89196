"""Request authorization steps: identity resolution, then ownership."""

from bookshelf.domain.ownership import ensure_list_item_access
from bookshelf.errors import AuthRequiredError
from bookshelf.repositories.base import ListItemRecord, ListItemsStore
from bookshelf.schemas.auth import User
from bookshelf.services.auth import AuthService

MISSING_TOKEN_MESSAGE = "No authorization token was found"


class AuthorizationGuard:
    """Gates protected operations.

    Each step either returns the resolved value or raises an ``ApiError``;
    callers only continue to the resource operation on a returned value.
    A missing header and an unknown token fail identically.
    """

    def __init__(self, auth_service: AuthService, list_items: ListItemsStore) -> None:
        self._auth_service = auth_service
        self._list_items = list_items

    async def identify(self, token: str | None) -> User:
        user = await self._auth_service.resolve_token(token) if token else None
        if user is None:
            raise AuthRequiredError(MISSING_TOKEN_MESSAGE)
        return user

    async def load_owned_list_item(self, *, user: User, list_item_id: str) -> ListItemRecord:
        list_item = await self._list_items.read_by_id(list_item_id)
        return ensure_list_item_access(user_id=user.id, list_item_id=list_item_id, list_item=list_item)
