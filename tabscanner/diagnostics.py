from __future__ import annotations

import logging
from typing import Any, Mapping

import structlog

from .errors import RawResponse

BODY_LOG_LIMIT = 500
REDACTED = "[REDACTED]"
_SECRET_HEADERS = {"apikey", "authorization"}


def configure_logging(debug: bool = False, *, json: bool = True) -> None:
    renderer = structlog.processors.JSONRenderer() if json else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG if debug else logging.WARNING),
    )


def get_logger() -> Any:
    return structlog.get_logger("tabscanner")


def mask_sensitive(value: str | None) -> str | None:
    if value is None:
        return None
    if len(value) <= 4:
        return "*" * len(value)
    return f"{value[:2]}***{value[-2:]}"


def truncate_body(body: str | None, limit: int = BODY_LOG_LIMIT) -> str | None:
    if body is None or len(body) <= limit:
        return body
    return f"{body[:limit]}... (truncated)"


def redact_headers(headers: Mapping[str, str]) -> dict[str, str]:
    return {key: REDACTED if key.lower() in _SECRET_HEADERS else value for key, value in headers.items()}


def log_exchange(
    logger: Any,
    method: str,
    path: str,
    request_headers: Mapping[str, str],
    raw: RawResponse,
) -> None:
    """Emit request/response debug events; sink failures are ignored."""
    try:
        logger.debug(
            "http_request",
            method=method.upper(),
            path=path,
            headers=redact_headers(request_headers),
        )
        logger.debug(
            "http_response",
            method=method.upper(),
            path=path,
            status_code=raw.status,
            headers=dict(raw.headers),
            body=truncate_body(raw.body),
        )
    except Exception:  # nosec B110
        pass


def log_event(logger: Any, event: str, **fields: Any) -> None:
    try:
        logger.debug(event, **fields)
    except Exception:  # nosec B110
        pass
