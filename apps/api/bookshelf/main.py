"""FastAPI application entrypoint."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from bookshelf.core.config import get_settings
from bookshelf.core.error_translator import ErrorTranslatorMiddleware, error_response
from bookshelf.core.logging_safety import request_log_fields
from bookshelf.errors import ApiError, ValidationError
from bookshelf.repositories.memory import InMemoryStore
from bookshelf.routes import auth_router, books_router, list_items_router

logger = logging.getLogger(__name__)

INVALID_PAYLOAD_MESSAGE = "Invalid request payload"


def create_app(store: InMemoryStore | None = None) -> FastAPI:
    settings = get_settings()
    app = FastAPI(title="Bookshelf API", version="0.1.0")
    app.state.store = store if store is not None else InMemoryStore()

    @app.exception_handler(ApiError)
    async def handle_api_error(_, exc: ApiError) -> JSONResponse:
        return error_response(exc, expose_stack=settings.expose_error_stack)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        # Body schema failures share the 400 {message} shape of service-level validation.
        correlation_id, method, path = request_log_fields(request)
        logger.info(
            "request.invalid_payload correlation_id=%s method=%s path=%s errors=%d",
            correlation_id,
            method,
            path,
            len(exc.errors()),
        )
        return error_response(ValidationError(INVALID_PAYLOAD_MESSAGE))

    app.add_middleware(ErrorTranslatorMiddleware, expose_stack=settings.expose_error_stack)

    app.include_router(auth_router, prefix=settings.api_prefix)
    app.include_router(list_items_router, prefix=settings.api_prefix)
    app.include_router(books_router, prefix=settings.api_prefix)

    return app


app = create_app()
