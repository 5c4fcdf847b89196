"""API error response schemas."""

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    code: str | None = None
    message: str


class InternalErrorResponse(BaseModel):
    """Body for unrecognised failures; ``stack`` is dropped outside development."""

    message: str
    stack: str | None = None
