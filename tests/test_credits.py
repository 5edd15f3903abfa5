import httpx
import pytest

from tabscanner.client import TabscannerClient
from tabscanner.errors import APIError, ConfigurationError, ParseError, ServerError, UnauthorizedError
from tabscanner.settings import TabscannerSettings


def _client(handler, **overrides) -> TabscannerClient:
    settings = TabscannerSettings(api_key="test_api_key", region="us", **overrides)
    return TabscannerClient(settings, transport=httpx.MockTransport(handler))


def _reply(status: int, text: str):
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, text=text, headers={"Content-Type": "application/json"})

    return handler


@pytest.mark.parametrize(("body", "expected"), [("150", 150), ("150.7", 150), ("0", 0), ("-2.9", -2)])
def test_numeric_body_is_truncated(body: str, expected: int):
    with _client(_reply(200, body)) as client:
        assert client.get_credits() == expected


def test_request_shape():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["method"] = request.method
        captured["path"] = request.url.path
        captured["headers"] = dict(request.headers)
        return httpx.Response(200, text="42")

    with _client(handler) as client:
        assert client.get_credits() == 42

    assert captured["method"] == "GET"
    assert captured["path"] == "/api/credit"
    assert captured["headers"]["apikey"] == "test_api_key"
    assert captured["headers"]["accept"] == "application/json"


@pytest.mark.parametrize(
    ("body", "type_name"),
    [('{"credits": 1}', "object"), ('"150"', "string"), ("[1]", "array"), ("null", "null"), ("true", "boolean")],
)
def test_non_numeric_json_is_generic_failure(body: str, type_name: str):
    with _client(_reply(200, body)) as client:
        with pytest.raises(APIError, match=f"expected number, got {type_name}"):
            client.get_credits()


def test_invalid_json_is_parse_failure():
    with _client(_reply(200, "oops")) as client:
        with pytest.raises(ParseError, match="Invalid JSON response from API"):
            client.get_credits()


def test_http_errors_use_shared_classification():
    with _client(_reply(401, "")) as client:
        with pytest.raises(UnauthorizedError):
            client.get_credits()
    with _client(_reply(502, '{"message": "upstream"}')) as client:
        with pytest.raises(ServerError, match="upstream"):
            client.get_credits()


def test_configuration_is_validated_first():
    def handler(_request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    client = TabscannerClient(TabscannerSettings(api_key="key", region=""), transport=httpx.MockTransport(handler))
    with pytest.raises(ConfigurationError, match="Region cannot be empty"):
        client.get_credits()
    client.close()
