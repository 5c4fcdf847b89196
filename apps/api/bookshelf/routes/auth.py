"""Authentication routes."""

from typing import Annotated

from fastapi import APIRouter, Depends

from bookshelf.routes.dependencies import get_auth_service, get_current_user
from bookshelf.schemas.auth import CredentialsRequest, User, UserResponse
from bookshelf.schemas.error import ErrorResponse
from bookshelf.services.auth import AuthService

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post(
    "/register",
    response_model=UserResponse,
    responses={400: {"model": ErrorResponse}},
)
async def register(
    payload: CredentialsRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> UserResponse:
    user = await service.register(username=payload.username, password=payload.password)
    return UserResponse(user=user)


@router.post(
    "/login",
    response_model=UserResponse,
    responses={400: {"model": ErrorResponse}},
)
async def login(
    payload: CredentialsRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> UserResponse:
    user = await service.login(username=payload.username, password=payload.password)
    return UserResponse(user=user)


@router.get(
    "/me",
    response_model=UserResponse,
    responses={401: {"model": ErrorResponse}},
)
async def me(user: Annotated[User, Depends(get_current_user)]) -> UserResponse:
    return UserResponse(user=user)
