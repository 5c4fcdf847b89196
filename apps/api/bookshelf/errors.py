"""Application exception types."""

from bookshelf.schemas.error import ErrorResponse


class ApiError(Exception):
    """Structured API error that maps directly to contract error payloads."""

    status_code: int = 500
    default_code: str | None = None

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        status_code: int | None = None,
    ) -> None:
        if status_code is not None:
            self.status_code = status_code
        self.payload = ErrorResponse(code=code or self.default_code, message=message)
        super().__init__(message)

    @property
    def message(self) -> str:
        return self.payload.message


class ValidationError(ApiError):
    """Malformed or missing input; the caller may resubmit."""

    status_code = 400


class ConflictError(ApiError):
    """Input collides with existing state (duplicate username, duplicate list item)."""

    status_code = 400


class AuthRequiredError(ApiError):
    """Missing or unresolvable bearer credential."""

    status_code = 401
    default_code = "credentials_required"


class ForbiddenError(ApiError):
    status_code = 403


class NotFoundError(ApiError):
    status_code = 404


__all__ = [
    "ApiError",
    "AuthRequiredError",
    "ConflictError",
    "ForbiddenError",
    "NotFoundError",
    "ValidationError",
]
