"""Utilities for safe structured logging fields."""

from __future__ import annotations

import hashlib
from typing import Any
from uuid import uuid4

from fastapi.requests import HTTPConnection

CORRELATION_HEADER = "X-Correlation-Id"


def safe_log_identifier(value: Any, *, prefix: str) -> str:
    """Return a deterministic non-reversible token for log correlation fields.

    Usernames and user ids only reach log lines through here.
    """
    text = str(value or "").strip()
    if not text:
        return f"{prefix}-missing"

    digest = hashlib.sha256(text.encode("utf-8")).hexdigest()[:12]
    return f"{prefix}-{digest}"


def request_correlation_id(connection: HTTPConnection) -> str:
    """Reuse the caller's correlation id or mint one, caching it on request state."""
    existing = getattr(connection.state, "correlation_id", None)
    if isinstance(existing, str) and existing:
        return existing

    correlation_id = connection.headers.get(CORRELATION_HEADER) or f"req-{uuid4()}"
    connection.state.correlation_id = correlation_id
    return correlation_id


def request_log_fields(connection: HTTPConnection) -> tuple[str, str, str]:
    """Return ``(correlation_id, method, path)`` ready for ``%s`` log formatting."""
    correlation_id = safe_log_identifier(request_correlation_id(connection), prefix="cid")
    method = connection.scope.get("method", "-")
    return correlation_id, method, connection.url.path
