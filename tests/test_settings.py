import pydantic
import pytest

from tabscanner.errors import ConfigurationError
from tabscanner.settings import DEFAULT_BASE_URL, TabscannerSettings


def test_validate_requires_api_key():
    with pytest.raises(ConfigurationError, match="API key is required"):
        TabscannerSettings(api_key="").validate()
    with pytest.raises(ConfigurationError):
        TabscannerSettings().validate()


def test_validate_requires_region():
    with pytest.raises(ConfigurationError, match="Region cannot be empty"):
        TabscannerSettings(api_key="key", region="").validate()


def test_valid_settings_pass():
    TabscannerSettings(api_key="key", region="us").validate()


def test_base_url_resolution():
    assert TabscannerSettings().resolved_base_url == DEFAULT_BASE_URL
    assert TabscannerSettings(base_url="https://eu.example/").resolved_base_url == "https://eu.example"


def test_settings_are_immutable():
    settings = TabscannerSettings(api_key="key")

    with pytest.raises(pydantic.ValidationError):
        settings.api_key = "other"


def test_from_env(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("TABSCANNER_API_KEY", "env-key")
    monkeypatch.setenv("TABSCANNER_REGION", "eu")
    monkeypatch.setenv("TABSCANNER_BASE_URL", "https://sandbox.example")
    monkeypatch.setenv("TABSCANNER_DEBUG", "true")
    monkeypatch.setenv("TABSCANNER_TIMEOUT", "not-a-number")

    settings = TabscannerSettings.from_env(dotenv=False)

    assert settings.api_key == "env-key"
    assert settings.region == "eu"
    assert settings.base_url == "https://sandbox.example"
    assert settings.debug is True
    assert settings.request_timeout_seconds == 30.0


def test_from_env_defaults(monkeypatch: pytest.MonkeyPatch):
    for name in ("TABSCANNER_API_KEY", "TABSCANNER_REGION", "TABSCANNER_BASE_URL", "TABSCANNER_DEBUG", "TABSCANNER_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)

    settings = TabscannerSettings.from_env(dotenv=False)

    assert settings.api_key is None
    assert settings.region == "us"
    assert settings.debug is False
