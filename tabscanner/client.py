from __future__ import annotations

from typing import Any

import httpx

from .credits import CreditsReader
from .http import HttpSession
from .images import ImageSource
from .poller import DEFAULT_TIMEOUT_SECONDS, ResultPoller
from .settings import TabscannerSettings
from .submitter import ReceiptSubmitter


class TabscannerClient:
    """Blocking client for /api/2/process, /api/2/result/{token} and /api/credit."""

    def __init__(
        self,
        settings: TabscannerSettings | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
        http_client: httpx.Client | None = None,
        logger: Any = None,
    ) -> None:
        self.settings = settings if settings is not None else TabscannerSettings.from_env()
        self._session = HttpSession(self.settings, transport=transport, http_client=http_client, logger=logger)
        self._submitter = ReceiptSubmitter(self._session)
        self._poller = ResultPoller(self._session)
        self._credits = CreditsReader(self._session)

    def __enter__(self) -> "TabscannerClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._session.close()

    def submit_receipt(self, source: ImageSource) -> str:
        return self._submitter.submit(source)

    def get_result(self, token: str, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> Any:
        return self._poller.poll(token, timeout=timeout)

    def get_credits(self) -> int:
        return self._credits.get_credits()
