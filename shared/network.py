"""
APWarden HTTP Client
=====================

Synchronous HTTP client built on **httpx**, used to fetch the authorized
access point registry from a URL and to deliver the rogue-AP report.

- Automatic retry with exponential backoff and jitter.
- Retry on transport errors and on transient HTTP status codes.
- Structured logging integration.

References:
    - Nygard, M. T. (2018). Release It!: Design and Deploy
      Production-Ready Software. 2nd ed. Pragmatic Bookshelf.
    - AWS Architecture Blog (2015). Exponential Backoff and Jitter.
"""

from __future__ import annotations

import random
import time
from typing import Any, Optional

import httpx

from shared.logger import WardenLogger

logger = WardenLogger("shared.network")


# ========================== Exception ======================================


class WardenHTTPError(Exception):
    """Wraps transport errors, timeout errors, and HTTP status failures
    into a single exception type.
    """


# ========================== HTTP Client ====================================


class WardenHTTP:
    """HTTP client with retry and backoff.

    Usage::

        with WardenHTTP(timeout=10) as http:
            text = http.fetch_text("https://example.org/authorized.txt")
            http.post_json("https://example.org/rogues", payload)

    Args:
        timeout:       Request timeout in seconds.
        max_retries:   Maximum retry attempts on transient errors.
        backoff_base:  Base delay (seconds) for exponential backoff.
        backoff_max:   Maximum delay cap (seconds).
        headers:       Default HTTP headers merged into every request.
        user_agent:    User-Agent header value.
        transport:     Optional httpx transport (e.g. ``httpx.MockTransport``).
    """

    _RETRYABLE_STATUS: frozenset[int] = frozenset({429, 500, 502, 503, 504})

    def __init__(
        self,
        *,
        timeout: float = 30.0,
        max_retries: int = 3,
        backoff_base: float = 1.0,
        backoff_max: float = 30.0,
        headers: dict[str, str] | None = None,
        user_agent: str = "APWarden/1.0",
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._max_retries = max_retries
        self._backoff_base = backoff_base
        self._backoff_max = backoff_max

        default_headers = {"User-Agent": user_agent}
        if headers:
            default_headers.update(headers)

        self._client = httpx.Client(
            timeout=httpx.Timeout(timeout),
            headers=default_headers,
            follow_redirects=True,
            transport=transport,
        )

    # ------------------------------------------------------------------ #
    #  Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> WardenHTTP:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying httpx client."""
        self._client.close()

    # ------------------------------------------------------------------ #
    #  Core fetch
    # ------------------------------------------------------------------ #

    def fetch(
        self,
        url: str,
        *,
        method: str = "GET",
        json_body: Any = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Execute an HTTP request with retry.

        Returns:
            :class:`httpx.Response` on success.

        Raises:
            WardenHTTPError: On a non-retryable HTTP error or exhausted retries.
        """
        attempts = self._max_retries + 1
        for attempt in range(attempts):
            try:
                response = self._client.request(
                    method=method.upper(),
                    url=url,
                    json=json_body,
                    headers=headers,
                )
            except httpx.TransportError as exc:
                logger.warning(
                    "Transport error on %s %s (attempt %d/%d): %s",
                    method, url, attempt + 1, attempts, exc,
                )
                if attempt < self._max_retries:
                    self._backoff(attempt)
                    continue
                raise WardenHTTPError(
                    f"All {attempts} attempts exhausted for {url}"
                ) from exc

            if response.status_code in self._RETRYABLE_STATUS:
                logger.warning(
                    "HTTP %d on %s %s (attempt %d/%d)",
                    response.status_code, method, url, attempt + 1, attempts,
                )
                if attempt < self._max_retries:
                    self._backoff(attempt)
                    continue
                raise WardenHTTPError(f"HTTP {response.status_code} from {url}")

            try:
                response.raise_for_status()
            except httpx.HTTPStatusError as exc:
                raise WardenHTTPError(str(exc)) from exc
            return response

        raise WardenHTTPError(f"No response from {url}")

    def fetch_text(self, url: str) -> str:
        """GET *url* and return the decoded response body."""
        return self.fetch(url).text

    def post_json(self, url: str, payload: Any) -> httpx.Response:
        """POST *payload* as JSON to *url*."""
        return self.fetch(url, method="POST", json_body=payload)

    # ------------------------------------------------------------------ #
    #  Internal helpers
    # ------------------------------------------------------------------ #

    def _backoff(self, attempt: int) -> None:
        """Sleep with exponential backoff and full jitter."""
        base_delay = min(self._backoff_max, self._backoff_base * (2 ** attempt))
        jittered = base_delay * random.random()
        logger.debug("Backing off %.2fs (attempt %d)", jittered, attempt + 1)
        time.sleep(jittered)


def is_url(location: str) -> bool:
    """Return ``True`` if *location* looks like an http(s) URL."""
    return location.lower().startswith(("http://", "https://"))
