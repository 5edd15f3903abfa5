"""Turns an HTTP status code and body into a success or a classified failure.

Everything here is pure: the same (status, body) pair always produces the same
``Classification``. Raising is left to :func:`raise_for_response`, which also
attaches the raw exchange to the error.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from .errors import ErrorKind, ParseError, RawResponse, error_for_kind

UNAUTHORIZED_MESSAGE = "Invalid API key or authentication failed"
VALIDATION_FALLBACK = "Request validation failed"
SERVER_FALLBACK = "Server error occurred"
RAW_BODY_MESSAGE_LIMIT = 200


@dataclass(frozen=True, slots=True)
class Classification:
    kind: ErrorKind | None
    message: str | None = None

    @property
    def ok(self) -> bool:
        return self.kind is None


def extract_error_message(body: str | None) -> str | None:
    if not body:
        return None
    try:
        data = json.loads(body)
    except ValueError:
        return body if len(body) < RAW_BODY_MESSAGE_LIMIT else None
    if not isinstance(data, dict):
        return None
    for key in ("error", "message"):
        value = data.get(key)
        if value:
            return str(value)
    errors = data.get("errors")
    if isinstance(errors, list) and errors and errors[0]:
        return str(errors[0])
    return None


def kind_for_status(status: int) -> ErrorKind | None:
    if status in (200, 201):
        return None
    if status == 401:
        return ErrorKind.unauthorized
    if status == 422:
        return ErrorKind.validation
    if 500 <= status <= 599:
        return ErrorKind.server_failure
    return ErrorKind.generic_failure


def classify(status: int, body: str | None, *, validation_fallback: str = VALIDATION_FALLBACK) -> Classification:
    kind = kind_for_status(status)
    if kind is None:
        return Classification(kind=None)
    if kind is ErrorKind.unauthorized:
        return Classification(kind=kind, message=UNAUTHORIZED_MESSAGE)

    message = extract_error_message(body)
    if message is None:
        if kind is ErrorKind.validation:
            message = validation_fallback
        elif kind is ErrorKind.server_failure:
            message = SERVER_FALLBACK
        else:
            message = f"Request failed with status {status}"
    return Classification(kind=kind, message=message)


def raise_for_response(
    raw: RawResponse,
    *,
    debug: bool = False,
    validation_fallback: str = VALIDATION_FALLBACK,
) -> str:
    """Return the body of a successful response or raise the classified error."""
    result = classify(raw.status, raw.body, validation_fallback=validation_fallback)
    if result.ok:
        return raw.body
    raise error_for_kind(result.kind, result.message or "", raw_response=raw, debug=debug)


def decode_json(raw: RawResponse) -> Any:
    try:
        return json.loads(raw.body)
    except ValueError as exc:
        raise ParseError("Invalid JSON response from API") from exc
