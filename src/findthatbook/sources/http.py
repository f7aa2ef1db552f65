# ABOUTME: HTTP client abstraction for the catalog and intent-extraction API calls.
# ABOUTME: Provides rate limiting, retry with backoff, and injectable transport for testing.

import logging
import time
from typing import Any, Protocol, runtime_checkable

import httpx

logger = logging.getLogger(__name__)

_RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}
_USER_AGENT = "findthatbook/0.1.0"


class FetchError(Exception):
    """Raised when an HTTP request to an external API fails.

    status_code is the last HTTP status seen (200 when the body was not valid
    JSON), or None when the request never got a response (connection refused,
    timeout).
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for the JSON GET/POST operations the API clients need."""

    def get(self, url: str, params: dict[str, str] | None = None) -> Any: ...

    def post_json(
        self, url: str, payload: dict[str, Any], params: dict[str, str] | None = None
    ) -> Any: ...


class FindThatBookHttpClient:
    """HTTP client with rate limiting and retry for external API calls.

    Wraps httpx.Client with configurable request intervals and retry logic
    for transient failures (429, 5xx).
    """

    def __init__(
        self,
        *,
        min_request_interval: float = 0.1,
        max_retries: int = 3,
        retry_delay: float = 1.0,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        client_kwargs: dict[str, Any] = {
            "headers": {"User-Agent": _USER_AGENT},
            "timeout": timeout,
        }
        if transport is not None:
            client_kwargs["transport"] = transport
        self._client = httpx.Client(**client_kwargs)
        self._min_interval = min_request_interval
        self._max_retries = max_retries
        self._retry_delay = retry_delay
        self._last_request_time: float = 0.0

    def get(self, url: str, params: dict[str, str] | None = None) -> Any:
        """Send a GET request with rate limiting and retry.

        Returns:
            Parsed JSON response body.

        Raises:
            FetchError: On non-retryable HTTP errors or exhausted retries.
        """
        return self._request("GET", url, params=params)

    def post_json(
        self, url: str, payload: dict[str, Any], params: dict[str, str] | None = None
    ) -> Any:
        """Send a JSON POST request with rate limiting and retry.

        Returns:
            Parsed JSON response body.

        Raises:
            FetchError: On non-retryable HTTP errors or exhausted retries.
        """
        return self._request("POST", url, params=params, json=payload)

    def close(self) -> None:
        self._client.close()

    def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        self._rate_limit()

        attempts = 1 + self._max_retries
        last_status = 0
        for attempt in range(attempts):
            try:
                response = self._client.request(method, url, **kwargs)
                last_status = response.status_code
            except httpx.HTTPError as exc:
                raise FetchError(f"Request failed: {url}: {exc}") from exc

            if response.status_code == 200:
                try:
                    return response.json()
                except ValueError as exc:
                    raise FetchError(f"Invalid JSON from {url}: {exc}", 200) from exc

            if response.status_code not in _RETRYABLE_STATUS_CODES:
                raise FetchError(
                    f"HTTP {response.status_code} from {url}", response.status_code
                )

            if attempt < attempts - 1:
                delay = self._retry_delay * (2**attempt)
                logger.warning(
                    "HTTP %d from %s, retrying in %.1fs (attempt %d/%d)",
                    response.status_code,
                    url,
                    delay,
                    attempt + 1,
                    self._max_retries,
                )
                time.sleep(delay)

        raise FetchError(
            f"HTTP {last_status} from {url} after {attempts} attempts", last_status
        )

    def _rate_limit(self) -> None:
        """Sleep if needed to maintain minimum interval between requests."""
        if self._min_interval <= 0:
            return
        now = time.monotonic()
        elapsed = now - self._last_request_time
        if elapsed < self._min_interval and self._last_request_time > 0:
            time.sleep(self._min_interval - elapsed)
        self._last_request_time = time.monotonic()
