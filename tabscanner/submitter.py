from __future__ import annotations

from typing import Any

from .classifier import decode_json, kind_for_status, raise_for_response
from .errors import ErrorKind, ParseError, RawResponse, error_for_kind
from .http import SUBMIT_PATH, HttpSession
from .images import ImageSource, open_image

TOKEN_KEYS = ("token", "id", "request_id")
BUSINESS_FAILURE_FALLBACK = "API request failed"


def kind_for_business_code(code: Any) -> ErrorKind:
    # Business codes never mean success, so 200/201 fall through to generic.
    if isinstance(code, bool) or not isinstance(code, int):
        return ErrorKind.generic_failure
    kind = kind_for_status(code)
    return kind or ErrorKind.generic_failure


def extract_token(data: Any) -> str:
    if isinstance(data, dict):
        for key in TOKEN_KEYS:
            value = data.get(key)
            if isinstance(value, bool) or value is None:
                continue
            token = str(value)
            if token:
                return token
    raise ParseError("No token found in response")


def parse_submit_response(raw: RawResponse, *, debug: bool = False) -> str:
    """Classify a submission response and return its processing token.

    A 200 reply can still carry ``{"success": false, "code": N}``; that case is
    re-classified using ``N`` instead of the HTTP status.
    """
    raise_for_response(raw, debug=debug)
    data = decode_json(raw)
    if isinstance(data, dict) and data.get("success") is False:
        message = data.get("message") or BUSINESS_FAILURE_FALLBACK
        raise error_for_kind(
            kind_for_business_code(data.get("code")),
            str(message),
            raw_response=raw,
            debug=debug,
        )
    return extract_token(data)


class ReceiptSubmitter:
    def __init__(self, session: HttpSession) -> None:
        self.session = session

    def submit(self, source: ImageSource) -> str:
        settings = self.session.settings
        settings.validate()
        with open_image(source) as upload:
            raw = self.session.post(SUBMIT_PATH, files=upload.as_multipart())
        return parse_submit_response(raw, debug=settings.debug)
