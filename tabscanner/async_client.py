from __future__ import annotations

import asyncio
import time
from typing import Any, Callable

import httpx

from .credits import parse_credits_response
from .diagnostics import log_event
from .http import CREDIT_PATH, SUBMIT_PATH, AsyncHttpSession
from .images import ImageSource, open_image
from .poller import (
    DEFAULT_TIMEOUT_SECONDS,
    POLL_INTERVAL_SECONDS,
    TERMINAL_EVENTS,
    JobStatus,
    interpret_poll_response,
    resolve_job,
    result_path,
    timeout_error,
)
from .settings import TabscannerSettings
from .submitter import parse_submit_response


class AsyncTabscannerClient:
    """asyncio counterpart of :class:`TabscannerClient`.

    ``get_result`` accepts an ``asyncio.Event``; once set, polling stops with
    ``asyncio.CancelledError`` at the next deadline check.
    """

    def __init__(
        self,
        settings: TabscannerSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        http_client: httpx.AsyncClient | None = None,
        logger: Any = None,
        poll_interval: float = POLL_INTERVAL_SECONDS,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self.settings = settings if settings is not None else TabscannerSettings.from_env()
        self.poll_interval = poll_interval
        self._clock = clock
        self._session = AsyncHttpSession(self.settings, transport=transport, http_client=http_client, logger=logger)

    async def __aenter__(self) -> "AsyncTabscannerClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._session.aclose()

    async def submit_receipt(self, source: ImageSource) -> str:
        self.settings.validate()
        with open_image(source) as upload:
            raw = await self._session.post(SUBMIT_PATH, files=upload.as_multipart())
        return parse_submit_response(raw, debug=self.settings.debug)

    async def get_result(
        self,
        token: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        cancel_event: asyncio.Event | None = None,
    ) -> Any:
        self.settings.validate()
        debug = self.settings.debug
        logger = self._session.logger
        if debug:
            log_event(logger, "result_polling_started", token=token, timeout=timeout)

        clock = self._clock or time.monotonic
        started = clock()
        while True:
            if cancel_event is not None and cancel_event.is_set():
                raise asyncio.CancelledError(f"Polling cancelled for token {token}")
            if clock() - started >= timeout:
                raise timeout_error(timeout)

            raw = await self._session.get(result_path(token))
            status, body = interpret_poll_response(raw, debug=debug)
            if status is JobStatus.processing:
                if debug:
                    log_event(logger, "result_still_processing", token=token, wait_seconds=self.poll_interval)
                await asyncio.sleep(self.poll_interval)
                continue

            if debug:
                log_event(logger, TERMINAL_EVENTS[status], token=token, status=body.get("status"))
            return resolve_job(status, body, raw, debug=debug)

    async def get_credits(self) -> int:
        self.settings.validate()
        raw = await self._session.get(CREDIT_PATH)
        return parse_credits_response(raw, debug=self.settings.debug)
