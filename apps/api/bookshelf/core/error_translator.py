"""Translate failures into wire-level status codes and bodies."""

from __future__ import annotations

import logging
import traceback
from typing import Any

from fastapi.requests import HTTPConnection
from fastapi.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from bookshelf.core.logging_safety import request_log_fields
from bookshelf.errors import ApiError
from bookshelf.schemas.error import InternalErrorResponse

logger = logging.getLogger(__name__)


def translate_error(exc: BaseException, *, expose_stack: bool = True) -> tuple[int, dict[str, Any]]:
    """Return ``(status_code, body)`` for any exception.

    Known ``ApiError`` kinds keep their own status and payload; anything
    else becomes a 500 carrying the message and, in development, the trace.
    """
    if isinstance(exc, ApiError):
        return exc.status_code, exc.payload.model_dump(mode="json", exclude_none=True)

    payload = InternalErrorResponse(
        message=str(exc),
        stack="".join(traceback.format_exception(exc)) if expose_stack else None,
    )
    return 500, payload.model_dump(mode="json", exclude_none=True)


def error_response(exc: BaseException, *, expose_stack: bool = True) -> JSONResponse:
    status_code, body = translate_error(exc, expose_stack=expose_stack)
    return JSONResponse(status_code=status_code, content=body)


class ErrorTranslatorMiddleware:
    """Last-chance handler for exceptions no route-level handler claimed.

    Once the response start message has gone out a second response cannot
    be written, so the exception is re-raised to the next handler instead.
    """

    def __init__(self, app: ASGIApp, *, expose_stack: bool = True) -> None:
        self.app = app
        self.expose_stack = expose_stack

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_wrapper(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as exc:
            correlation_id, method, path = request_log_fields(HTTPConnection(scope))
            if response_started:
                logger.error(
                    "request.failed_after_start correlation_id=%s method=%s path=%s",
                    correlation_id,
                    method,
                    path,
                )
                raise

            if not isinstance(exc, ApiError):
                logger.exception(
                    "request.unhandled_error correlation_id=%s method=%s path=%s",
                    correlation_id,
                    method,
                    path,
                )
            response = error_response(exc, expose_stack=self.expose_stack)
            await response(scope, receive, send)


__all__ = ["ErrorTranslatorMiddleware", "error_response", "translate_error"]
