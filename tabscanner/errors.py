from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ErrorKind(str, Enum):
    unauthorized = "unauthorized"
    validation = "validation"
    server_failure = "server_failure"
    generic_failure = "generic_failure"
    configuration_invalid = "configuration_invalid"
    timeout = "timeout"
    parse_failure = "parse_failure"
    job_failed = "job_failed"


@dataclass(frozen=True, slots=True)
class RawResponse:
    """Captured HTTP exchange attached to errors and diagnostics."""

    status: int
    headers: dict[str, str] = field(default_factory=dict)
    body: str = ""


class TabscannerError(Exception):
    """Base error for every failure surfaced by the client.

    ``message`` is always the plain message. When ``debug`` is set and a raw
    response is attached, ``str(error)`` also carries status, headers and body.
    """

    kind = ErrorKind.generic_failure

    def __init__(self, message: str, *, raw_response: RawResponse | None = None, debug: bool = False) -> None:
        self.message = message
        self.raw_response = raw_response
        super().__init__(self._build_message(message, raw_response, debug))

    @staticmethod
    def _build_message(message: str, raw_response: RawResponse | None, debug: bool) -> str:
        if not debug or raw_response is None:
            return message
        lines = [f"Status: {raw_response.status}"]
        if raw_response.headers:
            lines.append(f"Headers: {raw_response.headers}")
        if raw_response.body:
            lines.append(f"Body: {raw_response.body}")
        return message + "\n\nDebug Information:\n" + "\n".join(lines)


class APIError(TabscannerError):
    """Raised for failures outside the other categories (unexpected status codes, missing files)."""


class ConfigurationError(TabscannerError):
    kind = ErrorKind.configuration_invalid


class UnauthorizedError(TabscannerError):
    kind = ErrorKind.unauthorized


class ValidationError(TabscannerError):
    kind = ErrorKind.validation


class ServerError(TabscannerError):
    kind = ErrorKind.server_failure


class ParseError(TabscannerError):
    kind = ErrorKind.parse_failure


class PollTimeoutError(TabscannerError):
    kind = ErrorKind.timeout


class JobFailedError(TabscannerError):
    """Raised when the remote service reports the processing job itself as failed."""

    kind = ErrorKind.job_failed


_ERRORS_BY_KIND: dict[ErrorKind, type[TabscannerError]] = {
    ErrorKind.unauthorized: UnauthorizedError,
    ErrorKind.validation: ValidationError,
    ErrorKind.server_failure: ServerError,
    ErrorKind.generic_failure: APIError,
    ErrorKind.configuration_invalid: ConfigurationError,
    ErrorKind.timeout: PollTimeoutError,
    ErrorKind.parse_failure: ParseError,
    ErrorKind.job_failed: JobFailedError,
}


def error_for_kind(
    kind: ErrorKind,
    message: str,
    *,
    raw_response: RawResponse | None = None,
    debug: bool = False,
) -> TabscannerError:
    return _ERRORS_BY_KIND[kind](message, raw_response=raw_response, debug=debug)
