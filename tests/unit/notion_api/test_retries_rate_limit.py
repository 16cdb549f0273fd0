"""Unit tests for retries.py and rate_limit.py.

Targets:
  - retries.py:    should_retry, compute_backoff
  - rate_limit.py: TokenBucket, AsyncTokenBucket
"""
from __future__ import annotations

from unittest.mock import MagicMock, patch

import httpx
import pytest

from notionrelay.notion_api.rate_limit import AsyncTokenBucket, TokenBucket
from notionrelay.notion_api.retries import compute_backoff, should_retry


# ---------------------------------------------------------------------------
# should_retry
# ---------------------------------------------------------------------------


class TestShouldRetry:
    def test_false_on_last_attempt(self):
        assert should_retry(429, None, attempt=4, max_attempts=5) is False

    def test_single_attempt_never_retries(self):
        assert should_retry(503, None, attempt=0, max_attempts=1) is False
        assert should_retry(None, httpx.ReadTimeout("slow"), attempt=0, max_attempts=1) is False

    @pytest.mark.parametrize("status", [429, 500, 502, 503, 504])
    def test_transient_statuses_retried(self, status):
        assert should_retry(status, None, attempt=0, max_attempts=3) is True

    @pytest.mark.parametrize("status", [400, 401, 403, 404, 409, 501])
    def test_other_statuses_not_retried(self, status):
        assert should_retry(status, None, attempt=0, max_attempts=3) is False

    def test_timeout_retried(self):
        exc = httpx.ReadTimeout("timed out", request=MagicMock())
        assert should_retry(None, exc, attempt=0, max_attempts=3) is True

    def test_network_error_retried(self):
        assert should_retry(None, httpx.ConnectError("refused"), attempt=1, max_attempts=3) is True

    def test_unrelated_exception_not_retried(self):
        assert should_retry(None, ValueError("boom"), attempt=0, max_attempts=3) is False

    def test_nothing_to_retry(self):
        assert should_retry(None, None, attempt=0, max_attempts=3) is False


# ---------------------------------------------------------------------------
# compute_backoff
# ---------------------------------------------------------------------------


class TestComputeBackoff:
    def test_exponential_without_jitter(self):
        delays = [compute_backoff(a, base=1.0, maximum=60.0, jitter=False) for a in range(4)]
        assert delays == [1.0, 2.0, 4.0, 8.0]

    def test_capped_at_maximum(self):
        assert compute_backoff(10, base=1.0, maximum=60.0, jitter=False) == 60.0

    def test_retry_after_wins(self):
        assert compute_backoff(3, base=1.0, maximum=60.0, jitter=False, retry_after=7.0) == 7.0

    def test_retry_after_not_capped(self):
        assert compute_backoff(0, maximum=60.0, jitter=False, retry_after=120.0) == 120.0

    def test_jitter_range(self):
        for _ in range(50):
            delay = compute_backoff(2, base=1.0, maximum=60.0, jitter=True)
            assert 2.0 <= delay < 4.0

    def test_jitter_uses_random(self):
        with patch("notionrelay.notion_api.retries.random.random", return_value=0.0):
            assert compute_backoff(1, base=1.0, jitter=True) == 1.0


# ---------------------------------------------------------------------------
# TokenBucket / AsyncTokenBucket
# ---------------------------------------------------------------------------


class TestTokenBucket:
    def test_invalid_rate(self):
        with pytest.raises(ValueError):
            TokenBucket(rate_rps=0)

    def test_invalid_burst(self):
        with pytest.raises(ValueError):
            TokenBucket(rate_rps=1, burst=0)

    def test_burst_served_without_waiting(self):
        bucket = TokenBucket(rate_rps=1.0, burst=3)
        with patch("notionrelay.notion_api.rate_limit.time.sleep") as mock_sleep:
            waits = [bucket.acquire() for _ in range(3)]
        assert waits == [0.0, 0.0, 0.0]
        mock_sleep.assert_not_called()

    def test_empty_bucket_waits_for_deficit(self):
        bucket = TokenBucket(rate_rps=2.0, burst=1)
        with (
            patch("notionrelay.notion_api.rate_limit.time.monotonic", return_value=100.0),
            patch("notionrelay.notion_api.rate_limit.time.sleep") as mock_sleep,
        ):
            bucket.last_refill = 100.0
            assert bucket.acquire() == 0.0
            wait = bucket.acquire()
        assert wait == pytest.approx(0.5)
        mock_sleep.assert_called_once_with(wait)

    def test_refill_capped_at_burst(self):
        bucket = TokenBucket(rate_rps=100.0, burst=2)
        bucket.last_refill -= 60
        bucket.take(0)
        assert bucket.tokens == 2


class TestAsyncTokenBucket:
    @pytest.mark.asyncio
    async def test_burst_served_without_waiting(self):
        bucket = AsyncTokenBucket(rate_rps=1.0, burst=2)
        assert await bucket.acquire() == 0.0
        assert await bucket.acquire() == 0.0

    @pytest.mark.asyncio
    async def test_empty_bucket_awaits(self):
        bucket = AsyncTokenBucket(rate_rps=1000.0, burst=1)
        await bucket.acquire()
        wait = await bucket.acquire()
        assert 0.0 <= wait <= 0.001

    def test_invalid_rate(self):
        with pytest.raises(ValueError):
            AsyncTokenBucket(rate_rps=-1)
