from __future__ import annotations

from typing import Any

from .async_client import AsyncTabscannerClient
from .classifier import Classification, classify
from .client import TabscannerClient
from .diagnostics import configure_logging
from .errors import (
    APIError,
    ConfigurationError,
    ErrorKind,
    JobFailedError,
    ParseError,
    PollTimeoutError,
    RawResponse,
    ServerError,
    TabscannerError,
    UnauthorizedError,
    ValidationError,
)
from .images import ImageSource
from .poller import DEFAULT_TIMEOUT_SECONDS, JobStatus
from .settings import TabscannerSettings
from .version import __version__


def submit_receipt(source: ImageSource, settings: TabscannerSettings | None = None) -> str:
    with TabscannerClient(settings) as client:
        return client.submit_receipt(source)


def get_result(token: str, timeout: float = DEFAULT_TIMEOUT_SECONDS, settings: TabscannerSettings | None = None) -> Any:
    with TabscannerClient(settings) as client:
        return client.get_result(token, timeout=timeout)


def get_credits(settings: TabscannerSettings | None = None) -> int:
    with TabscannerClient(settings) as client:
        return client.get_credits()


__all__ = [
    "APIError",
    "AsyncTabscannerClient",
    "Classification",
    "ConfigurationError",
    "ErrorKind",
    "ImageSource",
    "JobFailedError",
    "JobStatus",
    "ParseError",
    "PollTimeoutError",
    "RawResponse",
    "ServerError",
    "TabscannerClient",
    "TabscannerError",
    "TabscannerSettings",
    "UnauthorizedError",
    "ValidationError",
    "__version__",
    "classify",
    "configure_logging",
    "get_credits",
    "get_result",
    "submit_receipt",
]
