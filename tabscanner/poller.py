"""Result polling.

Each attempt ends in one of four ways: the job is complete (return the
payload), still processing (sleep and retry), failed, or reported with a status
we do not recognise. The deadline is checked before every request, never
during one, so a slow call can overrun it by one request's latency.
"""

from __future__ import annotations

import time
from enum import Enum
from typing import Any, Callable
from urllib.parse import quote

from .classifier import decode_json, raise_for_response
from .diagnostics import log_event
from .errors import APIError, JobFailedError, ParseError, PollTimeoutError, RawResponse
from .http import RESULT_PATH, HttpSession

POLL_INTERVAL_SECONDS = 1.0
DEFAULT_TIMEOUT_SECONDS = 15
TOKEN_VALIDATION_FALLBACK = "Invalid token or request"
METADATA_KEYS = frozenset({"status", "message", "timestamp", "id"})


class JobStatus(str, Enum):
    complete = "complete"
    processing = "processing"
    failed = "failed"
    unknown = "unknown"


_STATUS_VOCABULARY = {
    "complete": JobStatus.complete,
    "completed": JobStatus.complete,
    "success": JobStatus.complete,
    "processing": JobStatus.processing,
    "pending": JobStatus.processing,
    "in_progress": JobStatus.processing,
    "failed": JobStatus.failed,
    "error": JobStatus.failed,
}


def normalize_job_status(value: Any) -> JobStatus:
    if not isinstance(value, str):
        return JobStatus.unknown
    return _STATUS_VOCABULARY.get(value.strip().lower(), JobStatus.unknown)


def extract_result_payload(body: dict[str, Any]) -> Any:
    if "data" in body:
        return body["data"]
    if "receipt" in body:
        return body["receipt"]
    return {key: value for key, value in body.items() if key not in METADATA_KEYS}


def result_path(token: str) -> str:
    return RESULT_PATH.format(token=quote(str(token), safe=""))


def timeout_error(timeout: float) -> PollTimeoutError:
    return PollTimeoutError(f"Timeout waiting for result after {timeout} seconds")


def interpret_poll_response(raw: RawResponse, *, debug: bool = False) -> tuple[JobStatus, dict[str, Any]]:
    raise_for_response(raw, debug=debug, validation_fallback=TOKEN_VALIDATION_FALLBACK)
    body = decode_json(raw)
    if not isinstance(body, dict):
        raise ParseError("Unexpected response format from API: expected a JSON object")
    return normalize_job_status(body.get("status")), body


def resolve_job(status: JobStatus, body: dict[str, Any], raw: RawResponse, *, debug: bool = False) -> Any:
    """Return the payload of a complete job, raise for failed or unknown ones."""
    if status is JobStatus.complete:
        return extract_result_payload(body)
    if status is JobStatus.failed:
        message = body.get("error") or body.get("message") or "Processing failed"
        raise JobFailedError(str(message), raw_response=raw, debug=debug)
    raise APIError(f"Unknown processing status: {body.get('status')}", raw_response=raw, debug=debug)


TERMINAL_EVENTS = {
    JobStatus.complete: "result_ready",
    JobStatus.failed: "result_failed",
    JobStatus.unknown: "result_unknown_status",
}


class ResultPoller:
    def __init__(
        self,
        session: HttpSession,
        *,
        sleep: Callable[[float], None] | None = None,
        clock: Callable[[], float] | None = None,
        poll_interval: float = POLL_INTERVAL_SECONDS,
    ) -> None:
        self.session = session
        self._sleep = sleep
        self._clock = clock
        self.poll_interval = poll_interval

    def poll(self, token: str, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> Any:
        settings = self.session.settings
        settings.validate()
        logger = self.session.logger
        debug = settings.debug
        clock = self._clock or time.monotonic
        sleep = self._sleep or time.sleep

        if debug:
            log_event(logger, "result_polling_started", token=token, timeout=timeout)
        started = clock()
        while True:
            if clock() - started >= timeout:
                raise timeout_error(timeout)

            raw = self.session.get(result_path(token))
            status, body = interpret_poll_response(raw, debug=debug)
            if status is JobStatus.processing:
                if debug:
                    log_event(logger, "result_still_processing", token=token, wait_seconds=self.poll_interval)
                sleep(self.poll_interval)
                continue

            if debug:
                log_event(logger, TERMINAL_EVENTS[status], token=token, status=body.get("status"))
            return resolve_job(status, body, raw, debug=debug)
