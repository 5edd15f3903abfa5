from __future__ import annotations

import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from .errors import ConfigurationError

DEFAULT_BASE_URL = "https://api.tabscanner.com"


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _float_env(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


class TabscannerSettings(BaseModel):
    """Read-only client configuration, threaded explicitly through every call."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    api_key: str | None = None
    region: str = "us"
    base_url: str | None = None
    debug: bool = False
    request_timeout_seconds: float = Field(default=30.0, gt=0)

    @classmethod
    def from_env(cls, *, dotenv: bool = True) -> "TabscannerSettings":
        if dotenv:
            load_dotenv()
        return cls(
            api_key=os.getenv("TABSCANNER_API_KEY") or None,
            region=os.getenv("TABSCANNER_REGION") or "us",
            base_url=os.getenv("TABSCANNER_BASE_URL") or None,
            debug=_bool_env("TABSCANNER_DEBUG", False),
            request_timeout_seconds=max(_float_env("TABSCANNER_TIMEOUT", 30.0), 0.1),
        )

    @property
    def resolved_base_url(self) -> str:
        return (self.base_url or DEFAULT_BASE_URL).rstrip("/")

    def validate(self) -> None:
        if not self.api_key:
            raise ConfigurationError("API key is required")
        if not self.region:
            raise ConfigurationError("Region cannot be empty")
