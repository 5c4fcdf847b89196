"""Authentication schemas."""

from pydantic import BaseModel

from bookshelf.schemas.base import ApiModel


class CredentialsRequest(BaseModel):
    """Register/login body; blank fields are rejected by the service with contract messages."""

    username: str | None = None
    password: str | None = None


class User(ApiModel):
    """Public user representation. Never carries the password hash."""

    id: str
    username: str
    token: str


class UserResponse(ApiModel):
    user: User
