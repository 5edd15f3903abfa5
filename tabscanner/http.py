from __future__ import annotations

from typing import Any

import httpx

from .diagnostics import get_logger, log_exchange
from .errors import RawResponse
from .settings import TabscannerSettings
from .version import __version__

SUBMIT_PATH = "/api/2/process"
RESULT_PATH = "/api/2/result/{token}"
CREDIT_PATH = "/api/credit"
USER_AGENT = f"Tabscanner Python Client {__version__}"


def build_headers(settings: TabscannerSettings) -> dict[str, str]:
    return {
        "apikey": settings.api_key or "",
        "User-Agent": USER_AGENT,
        "Accept": "application/json",
    }


def to_raw_response(response: httpx.Response) -> RawResponse:
    return RawResponse(status=response.status_code, headers=dict(response.headers), body=response.text)


class HttpSession:
    """Blocking transport: one call, one ``RawResponse``."""

    def __init__(
        self,
        settings: TabscannerSettings,
        *,
        transport: httpx.BaseTransport | None = None,
        http_client: httpx.Client | None = None,
        logger: Any = None,
    ) -> None:
        self.settings = settings
        self.logger = logger or get_logger()
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(
            base_url=settings.resolved_base_url,
            timeout=settings.request_timeout_seconds,
            transport=transport,
        )

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def request(self, method: str, path: str, *, files: dict[str, Any] | None = None) -> RawResponse:
        headers = build_headers(self.settings)
        response = self._client.request(method, self._url(path), headers=headers, files=files)
        raw = to_raw_response(response)
        if self.settings.debug:
            log_exchange(self.logger, method, path, headers, raw)
        return raw

    def get(self, path: str) -> RawResponse:
        return self.request("GET", path)

    def post(self, path: str, *, files: dict[str, Any] | None = None) -> RawResponse:
        return self.request("POST", path, files=files)

    def _url(self, path: str) -> str:
        if self._owns_client:
            return path
        return self.settings.resolved_base_url + path


class AsyncHttpSession:
    def __init__(
        self,
        settings: TabscannerSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        http_client: httpx.AsyncClient | None = None,
        logger: Any = None,
    ) -> None:
        self.settings = settings
        self.logger = logger or get_logger()
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            base_url=settings.resolved_base_url,
            timeout=settings.request_timeout_seconds,
            transport=transport,
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def request(self, method: str, path: str, *, files: dict[str, Any] | None = None) -> RawResponse:
        headers = build_headers(self.settings)
        url = path if self._owns_client else self.settings.resolved_base_url + path
        response = await self._client.request(method, url, headers=headers, files=files)
        raw = to_raw_response(response)
        if self.settings.debug:
            log_exchange(self.logger, method, path, headers, raw)
        return raw

    async def get(self, path: str) -> RawResponse:
        return await self.request("GET", path)

    async def post(self, path: str, *, files: dict[str, Any] | None = None) -> RawResponse:
        return await self.request("POST", path, files=files)
