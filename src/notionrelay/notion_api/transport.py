"""Sync and async HTTP transports for the Notion API.

A request goes through these steps:

1. Wait for a token-bucket slot.
2. Send it with the ``Authorization`` and ``Notion-Version`` headers.
3. ``2xx`` -- return the decoded JSON body (``{}`` for an empty body).
4. ``429`` -- wait for ``Retry-After`` (or backoff) and try again.
5. ``5xx`` / network failure -- exponential backoff and try again.
6. Any other ``4xx`` -- raise the matching typed error at once.
7. Attempts used up -- raise :class:`NotionRelayRetryExhaustedError`.
"""

from __future__ import annotations

import asyncio
import json as _json
import sys
import time
from collections.abc import AsyncIterator, Iterator
from typing import Any

import httpx

from notionrelay.config import NotionRelayConfig
from notionrelay.errors import (
    NotionRelayAuthError,
    NotionRelayConflictError,
    NotionRelayNetworkError,
    NotionRelayNotFoundError,
    NotionRelayPermissionError,
    NotionRelayRetryExhaustedError,
    NotionRelayValidationError,
)
from notionrelay.observability import NoopMetricsHook, get_logger
from notionrelay.utils.redact import redact

from .rate_limit import AsyncTokenBucket, TokenBucket
from .retries import _RETRYABLE_STATUSES, compute_backoff, should_retry

log = get_logger("notionrelay.transport")

PAGE_SIZE_MAX = 100


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _parse_retry_after(response: httpx.Response) -> float | None:
    """Return the ``Retry-After`` header as seconds, or ``None``."""
    raw = response.headers.get("retry-after")
    if raw is None:
        return None
    try:
        return float(raw)
    except (ValueError, TypeError):
        return None


_STATUS_ERRORS: dict[int, tuple[type, str]] = {
    400: (NotionRelayValidationError, "Validation error"),
    401: (NotionRelayAuthError, "Authentication failed"),
    403: (NotionRelayPermissionError, "Permission denied"),
    404: (NotionRelayNotFoundError, "Resource not found"),
    409: (NotionRelayConflictError, "Conflict"),
}


def _raise_for_status(response: httpx.Response, method: str, path: str) -> None:
    """Raise the typed error for a non-retryable ``4xx`` response."""
    status = response.status_code
    try:
        body = response.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}

    notion_message = body.get("message", response.text[:500])
    context: dict[str, Any] = {
        "status_code": status,
        "notion_code": body.get("code", ""),
    }

    error_cls, label = _STATUS_ERRORS.get(status, (NotionRelayValidationError, f"Client error {status}"))
    if error_cls is NotionRelayValidationError:
        context["body"] = body
    elif error_cls is NotionRelayPermissionError:
        context["operation"] = f"{method} {path}"
    elif error_cls is NotionRelayNotFoundError:
        context["path"] = path

    raise error_cls(
        message=f"{label} on {method} {path}: {notion_message}",
        context=context,
    )


def _dump_payload(
    method: str,
    url: str,
    payload: dict | None,
    response_status: int | None,
    response_body: Any | None,
    token: str | None = None,
) -> None:
    """Write a redacted request/response dump to stderr."""
    dump: dict[str, Any] = {"method": method, "url": url}
    if payload is not None:
        dump["request_body"] = payload
    if response_status is not None:
        dump["response_status"] = response_status
    if response_body is not None:
        dump["response_body"] = response_body
    print(_json.dumps(redact(dump, token), indent=2, default=str), file=sys.stderr)


def _default_headers(config: NotionRelayConfig) -> dict[str, str]:
    return {
        "Authorization": f"Bearer {config.token}",
        "Notion-Version": config.notion_version,
        "Content-Type": "application/json",
    }


class _RequestPolicy:
    """Bookkeeping shared by the sync and async request loops.

    Holds no I/O: each method inspects one attempt's outcome and returns
    what the loop should do next.
    """

    def __init__(self, config: NotionRelayConfig) -> None:
        self.config = config
        self.metrics = config.metrics if config.metrics is not None else NoopMetricsHook()

    def record_wait(self, method: str, path: str, wait: float) -> None:
        if wait > 0:
            self.metrics.timing(
                "notionrelay.rate_limit_wait_ms",
                wait * 1000,
                tags={"method": method, "path": path},
            )

    def on_network_error(self, method: str, path: str, exc: Exception, attempt: int) -> float:
        """Return the delay before retrying, or raise when out of attempts."""
        self.metrics.increment(
            "notionrelay.requests_total",
            tags={"method": method, "path": path, "status": "error"},
        )
        log.warning(
            "Request network error",
            extra={
                "extra_fields": {
                    "op": "request",
                    "method": method,
                    "path": path,
                    "attempt": attempt + 1,
                    "error": str(exc),
                }
            },
        )
        if should_retry(None, exc, attempt, self.config.retry_max_attempts):
            self.metrics.increment(
                "notionrelay.retries_total",
                tags={"method": method, "path": path, "reason": "network_error"},
            )
            return self._backoff(attempt)
        raise NotionRelayNetworkError(
            message=f"Network error on {method} {path}: {exc}",
            context={"url": path, "attempt": attempt + 1},
            cause=exc,
        ) from exc

    def on_response(
        self,
        method: str,
        path: str,
        response: httpx.Response,
        elapsed_ms: float,
        attempt: int,
        payload: Any,
    ) -> tuple[dict | None, float | None]:
        """Classify a response.

        Returns ``(body, None)`` on success, ``(None, delay)`` when the
        request should be retried after *delay* seconds, and
        ``(None, None)`` when retries are used up.  Raises for
        non-retryable errors.
        """
        status = response.status_code
        tags = {"method": method, "path": path, "status": str(status)}
        self.metrics.increment("notionrelay.requests_total", tags=tags)
        self.metrics.timing("notionrelay.request_duration_ms", elapsed_ms, tags=tags)

        if self.config.debug_dump_payload:
            try:
                resp_body: Any = response.json()
            except ValueError:
                resp_body = response.text[:1000]
            _dump_payload(method, str(response.url), payload, status, resp_body, token=self.config.token)

        if 200 <= status < 300:
            if status == 204 or not response.content:
                return {}, None
            return response.json(), None

        if status not in _RETRYABLE_STATUSES:
            _raise_for_status(response, method, path)

        if not should_retry(status, None, attempt, self.config.retry_max_attempts):
            return None, None

        retry_after: float | None = None
        reason = "server_error"
        if status == 429:
            retry_after = _parse_retry_after(response)
            reason = "rate_limited"
            self.metrics.increment(
                "notionrelay.rate_limited_total",
                tags={"method": method, "path": path},
            )
            log.warning(
                "Rate limited by Notion API",
                extra={
                    "extra_fields": {
                        "op": "request",
                        "method": method,
                        "path": path,
                        "retry_after": retry_after,
                        "attempt": attempt + 1,
                    }
                },
            )

        self.metrics.increment(
            "notionrelay.retries_total",
            tags={"method": method, "path": path, "reason": reason},
        )
        return None, self._backoff(attempt, retry_after)

    def exhausted(
        self,
        method: str,
        path: str,
        last_status: int | None,
        last_exception: Exception | None,
    ) -> NotionRelayRetryExhaustedError:
        attempts = self.config.retry_max_attempts
        last = f"last error: {last_exception}" if last_exception else f"last status: {last_status}"
        return NotionRelayRetryExhaustedError(
            message=f"All {attempts} attempts exhausted for {method} {path} ({last})",
            context={"attempts": attempts, "last_status_code": last_status},
            cause=last_exception,
        )

    def _backoff(self, attempt: int, retry_after: float | None = None) -> float:
        return compute_backoff(
            attempt,
            base=self.config.retry_base_delay,
            maximum=self.config.retry_max_delay,
            jitter=self.config.retry_jitter,
            retry_after=retry_after,
        )


def _page_kwargs(method: str, kwargs: dict[str, Any], cursor: str | None) -> dict[str, Any]:
    """Merge ``page_size`` / ``start_cursor`` into the body (POST) or the
    query string (GET)."""
    location = "json" if method.upper() in ("POST", "PATCH") else "params"
    values: dict = dict(kwargs.get(location) or {})
    values["page_size"] = PAGE_SIZE_MAX
    if cursor is not None:
        values["start_cursor"] = cursor
    else:
        values.pop("start_cursor", None)
    return {**kwargs, location: values}


# ---------------------------------------------------------------------------
# Sync transport
# ---------------------------------------------------------------------------

class NotionTransport:
    """Synchronous HTTP transport with auth, retries and rate limiting.

    Parameters
    ----------
    config:
        Client configuration.
    """

    def __init__(self, config: NotionRelayConfig) -> None:
        self._config = config
        self._policy = _RequestPolicy(config)
        self._bucket = TokenBucket(rate_rps=config.rate_limit_rps, burst=10)
        self._client = httpx.Client(
            base_url=config.base_url,
            headers=_default_headers(config),
            timeout=httpx.Timeout(config.timeout_seconds),
            proxy=config.http_proxy,
        )

    def request(self, method: str, path: str, **kwargs: Any) -> dict:
        """Send a request and return the decoded JSON body.

        Parameters
        ----------
        method:
            HTTP method.
        path:
            Path relative to ``base_url``, e.g. ``/blocks/{id}``.
        **kwargs:
            Forwarded to :meth:`httpx.Client.request` (``json=``,
            ``params=``, ``headers=``).

        Raises
        ------
        NotionRelayValidationError, NotionRelayAuthError,
        NotionRelayPermissionError, NotionRelayNotFoundError,
        NotionRelayConflictError
            For the matching ``4xx`` statuses.
        NotionRelayRetryExhaustedError
            When every attempt hit a retryable failure.
        NotionRelayNetworkError
            When the last attempt failed at the network level.
        """
        policy = self._policy
        last_exception: Exception | None = None
        last_status: int | None = None

        for attempt in range(self._config.retry_max_attempts):
            policy.record_wait(method, path, self._bucket.acquire())

            t0 = time.monotonic()
            try:
                response = self._client.request(method, path, **kwargs)
            except (httpx.TimeoutException, httpx.NetworkError) as exc:
                last_exception, last_status = exc, None
                time.sleep(policy.on_network_error(method, path, exc, attempt))
                continue

            last_exception, last_status = None, response.status_code
            elapsed_ms = (time.monotonic() - t0) * 1000
            body, delay = policy.on_response(
                method, path, response, elapsed_ms, attempt, kwargs.get("json"),
            )
            if body is not None:
                return body
            if delay is None:
                break
            time.sleep(delay)

        raise policy.exhausted(method, path, last_status, last_exception)

    def paginate(self, path: str, **kwargs: Any) -> Iterator[dict]:
        """Yield every result of a cursor-paginated endpoint.

        Pass ``method="POST"`` for endpoints that take the cursor in the
        body (database query, search); the default is ``GET``.
        """
        method = kwargs.pop("method", "GET")
        cursor: str | None = None

        while True:
            data = self.request(method, path, **_page_kwargs(method, kwargs, cursor))
            yield from data.get("results", [])

            cursor = data.get("next_cursor")
            if not data.get("has_more", False) or cursor is None:
                break

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

    def __enter__(self) -> NotionTransport:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


# ---------------------------------------------------------------------------
# Async transport
# ---------------------------------------------------------------------------

class AsyncNotionTransport:
    """Asynchronous counterpart of :class:`NotionTransport`."""

    def __init__(self, config: NotionRelayConfig) -> None:
        self._config = config
        self._policy = _RequestPolicy(config)
        self._bucket = AsyncTokenBucket(rate_rps=config.rate_limit_rps, burst=10)
        self._client = httpx.AsyncClient(
            base_url=config.base_url,
            headers=_default_headers(config),
            timeout=httpx.Timeout(config.timeout_seconds),
            proxy=config.http_proxy,
        )

    async def request(self, method: str, path: str, **kwargs: Any) -> dict:
        """Send a request and return the decoded JSON body.

        See :meth:`NotionTransport.request`.
        """
        policy = self._policy
        last_exception: Exception | None = None
        last_status: int | None = None

        for attempt in range(self._config.retry_max_attempts):
            policy.record_wait(method, path, await self._bucket.acquire())

            t0 = time.monotonic()
            try:
                response = await self._client.request(method, path, **kwargs)
            except (httpx.TimeoutException, httpx.NetworkError) as exc:
                last_exception, last_status = exc, None
                await asyncio.sleep(policy.on_network_error(method, path, exc, attempt))
                continue

            last_exception, last_status = None, response.status_code
            elapsed_ms = (time.monotonic() - t0) * 1000
            body, delay = policy.on_response(
                method, path, response, elapsed_ms, attempt, kwargs.get("json"),
            )
            if body is not None:
                return body
            if delay is None:
                break
            await asyncio.sleep(delay)

        raise policy.exhausted(method, path, last_status, last_exception)

    async def paginate(self, path: str, **kwargs: Any) -> AsyncIterator[dict]:
        """Yield every result of a cursor-paginated endpoint.

        See :meth:`NotionTransport.paginate`.
        """
        method = kwargs.pop("method", "GET")
        cursor: str | None = None

        while True:
            data = await self.request(method, path, **_page_kwargs(method, kwargs, cursor))
            for item in data.get("results", []):
                yield item

            cursor = data.get("next_cursor")
            if not data.get("has_more", False) or cursor is None:
                break

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> AsyncNotionTransport:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()
