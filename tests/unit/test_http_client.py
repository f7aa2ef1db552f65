# ABOUTME: Unit tests for the HTTP client used by the catalog and intent-extraction clients.
# ABOUTME: Covers JSON GET/POST, rate limiting, retries, and the status carried by FetchError.

import json
import time

import httpx
import pytest

from findthatbook.sources.http import FetchError, FindThatBookHttpClient, HttpClient


class FakeTransport(httpx.BaseTransport):
    """httpx transport that replays canned responses and records requests."""

    def __init__(self, responses: list[httpx.Response] | None = None) -> None:
        self._responses = list(responses or [])
        self.requests: list[httpx.Request] = []

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self._responses:
            return self._responses.pop(0)
        return httpx.Response(200, json={"ok": True})

    @property
    def call_count(self) -> int:
        return len(self.requests)


class FailingTransport(httpx.BaseTransport):
    """Transport that never connects."""

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)


def _client(transport: httpx.BaseTransport, **kwargs) -> FindThatBookHttpClient:
    return FindThatBookHttpClient(min_request_interval=0.0, transport=transport, **kwargs)


class TestHttpClientProtocol:
    def test_client_satisfies_protocol(self) -> None:
        client = FindThatBookHttpClient(min_request_interval=0.0)
        assert isinstance(client, HttpClient)


class TestFindThatBookHttpClient:
    """Tests for FindThatBookHttpClient."""

    def test_get_returns_json(self) -> None:
        transport = FakeTransport()
        result = _client(transport).get("https://example.com/api", params={"q": "test"})

        assert result == {"ok": True}
        assert transport.requests[0].url.params["q"] == "test"

    def test_post_json_sends_payload(self) -> None:
        transport = FakeTransport([httpx.Response(200, json={"answer": 42})])
        client = _client(transport)

        result = client.post_json(
            "https://example.com/generate", {"prompt": "hi"}, params={"key": "secret"}
        )

        assert result == {"answer": 42}
        request = transport.requests[0]
        assert request.method == "POST"
        assert request.url.params["key"] == "secret"
        assert json.loads(request.content) == {"prompt": "hi"}

    def test_user_agent_header(self) -> None:
        client = _client(FakeTransport())
        assert "findthatbook/" in client._client.headers["user-agent"]

    def test_rate_limiting_delays_requests(self) -> None:
        transport = FakeTransport()
        interval = 0.15
        client = FindThatBookHttpClient(min_request_interval=interval, transport=transport)

        start = time.monotonic()
        client.get("https://example.com/1")
        client.get("https://example.com/2")
        elapsed = time.monotonic() - start

        assert elapsed >= interval
        assert transport.call_count == 2

    def test_http_error_carries_status(self) -> None:
        transport = FakeTransport([httpx.Response(404, json={"error": "not found"})])

        with pytest.raises(FetchError, match="404") as exc_info:
            _client(transport).get("https://example.com/missing")
        assert exc_info.value.status_code == 404
        assert transport.call_count == 1

    def test_retry_on_429(self) -> None:
        transport = FakeTransport(
            [
                httpx.Response(429, json={"error": "rate limited"}),
                httpx.Response(200, json={"ok": True}),
            ]
        )
        result = _client(transport, retry_delay=0.01).get("https://example.com/api")

        assert result == {"ok": True}
        assert transport.call_count == 2

    def test_retry_exhausted_raises(self) -> None:
        transport = FakeTransport([httpx.Response(500, json={"error": "boom"})] * 4)
        client = _client(transport, max_retries=3, retry_delay=0.01)

        with pytest.raises(FetchError, match="after 4 attempts") as exc_info:
            client.get("https://example.com/api")
        assert exc_info.value.status_code == 500
        assert transport.call_count == 4  # 1 initial + 3 retries

    def test_invalid_json_reports_status_200(self) -> None:
        transport = FakeTransport([httpx.Response(200, text="<html>oops</html>")])

        with pytest.raises(FetchError, match="Invalid JSON") as exc_info:
            _client(transport).get("https://example.com/api")
        assert exc_info.value.status_code == 200

    def test_transport_error_has_no_status(self) -> None:
        with pytest.raises(FetchError, match="Request failed") as exc_info:
            _client(FailingTransport()).get("https://example.com/api")
        assert exc_info.value.status_code is None
