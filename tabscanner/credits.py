from __future__ import annotations

import math

from .classifier import decode_json, raise_for_response
from .errors import APIError, RawResponse
from .http import CREDIT_PATH, HttpSession


def json_type_name(value: object) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def parse_credits_response(raw: RawResponse, *, debug: bool = False) -> int:
    raise_for_response(raw, debug=debug)
    value = decode_json(raw)
    # bool is an int subclass, but JSON true/false is not a credit count.
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise APIError(
            f"Invalid credit response format: expected number, got {json_type_name(value)}",
            raw_response=raw,
            debug=debug,
        )
    return int(value)


class CreditsReader:
    def __init__(self, session: HttpSession) -> None:
        self.session = session

    def get_credits(self) -> int:
        settings = self.session.settings
        settings.validate()
        raw = self.session.get(CREDIT_PATH)
        return parse_credits_response(raw, debug=settings.debug)
