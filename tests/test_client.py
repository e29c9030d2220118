"""
Tests for the Gemini client using httpx's mock transport (no network access).
"""

import asyncio
import json

import httpx
import pytest

from courtvision.client import GeminiClient
from courtvision.config import GeminiConfig
from courtvision.errors import AuthError, NetworkError, RequestError
from courtvision.prompts import build_request


def make_client(handler, api_key: str = "test-key") -> GeminiClient:
    config = GeminiConfig(api_key=api_key, model="test-model", base_url="https://gemini.test/v1beta")
    return GeminiClient(config, http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


def generate(client: GeminiClient) -> str:
    return asyncio.run(client.generate(build_request("Curry vs Lillard")))


def test_success_returns_candidate_text() -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["key"] = request.headers.get("x-goog-api-key")
        seen["body"] = json.loads(request.content)
        return httpx.Response(
            200,
            json={"candidates": [{"content": {"parts": [{"text": '{"mode": '}, {"text": '"RANKING"}'}]}}]},
        )

    text = generate(make_client(handler))

    assert text == '{"mode": "RANKING"}'
    assert seen["url"] == "https://gemini.test/v1beta/models/test-model:generateContent"
    assert seen["key"] == "test-key"
    assert seen["body"]["contents"][0]["parts"][0]["text"] == "Curry vs Lillard"
    assert seen["body"]["generationConfig"]["responseMimeType"] == "application/json"
    assert "responseSchema" in seen["body"]["generationConfig"]


def test_no_candidates_returns_empty_text() -> None:
    client = make_client(lambda request: httpx.Response(200, json={"candidates": []}))
    assert generate(client) == ""


def test_missing_api_key_raises_auth_error_without_calling() -> None:
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={})

    with pytest.raises(AuthError):
        generate(make_client(handler, api_key=""))
    assert calls == []


@pytest.mark.parametrize("status", [401, 403])
def test_rejected_credentials(status: int) -> None:
    client = make_client(lambda request: httpx.Response(status, text="denied"))
    with pytest.raises(AuthError) as exc_info:
        generate(client)
    assert exc_info.value.status_code == status


def test_quota_error_is_plain_request_error() -> None:
    client = make_client(lambda request: httpx.Response(429, text="RESOURCE_EXHAUSTED"))
    with pytest.raises(RequestError) as exc_info:
        generate(client)
    assert not isinstance(exc_info.value, (AuthError, NetworkError))
    assert exc_info.value.status_code == 429


def test_connection_failure_raises_network_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(NetworkError):
        generate(make_client(handler))


def test_timeout_raises_network_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("too slow", request=request)

    with pytest.raises(NetworkError):
        generate(make_client(handler))
