"""Retry decisions and backoff delays for the transport.

Both helpers are pure functions of their arguments (plus ``random`` for
jitter), which keeps the request loops in :mod:`.transport` small.
"""

from __future__ import annotations

import random

import httpx

# Statuses Notion documents as transient: rate limiting and gateway/server
# hiccups.
_RETRYABLE_STATUSES: frozenset[int] = frozenset({429, 500, 502, 503, 504})


def should_retry(
    status_code: int | None,
    exception: Exception | None,
    attempt: int,
    max_attempts: int,
) -> bool:
    """Decide whether a failed attempt should be followed by another.

    Parameters
    ----------
    status_code:
        HTTP status of the response, or ``None`` when no response arrived.
    exception:
        The exception raised by the HTTP client, if any.  Timeouts and
        connection-level failures qualify for a retry; anything else does
        not.
    attempt:
        Zero-based index of the attempt that just failed.
    max_attempts:
        Total attempts allowed, counting the first one.

    Returns
    -------
    bool
        ``True`` when the failure is transient (a qualifying *exception* or
        a status in ``_RETRYABLE_STATUSES``) and ``attempt + 1`` is still
        below *max_attempts*.
    """
    if attempt + 1 >= max_attempts:
        return False
    if exception is not None:
        return isinstance(exception, (httpx.TimeoutException, httpx.NetworkError))
    return status_code in _RETRYABLE_STATUSES


def compute_backoff(
    attempt: int,
    base: float = 1.0,
    maximum: float = 60.0,
    jitter: bool = True,
    retry_after: float | None = None,
) -> float:
    """Seconds to wait before retrying after attempt *attempt*.

    Parameters
    ----------
    attempt:
        Zero-based index of the attempt that just failed.
    base:
        Delay for the first retry; it doubles for each later attempt.
    maximum:
        Upper bound on the computed exponential delay.
    jitter:
        Multiply the result by a random factor in [0.5, 1.0) so concurrent
        clients spread out.
    retry_after:
        Server-supplied ``Retry-After`` value.  When given it replaces the
        exponential delay, *maximum* included.

    Returns
    -------
    float
        The delay in seconds.

    >>> compute_backoff(3, base=0.5, jitter=False)
    4.0
    """
    delay = retry_after if retry_after is not None else min(base * 2 ** attempt, maximum)
    return delay * (0.5 + random.random() / 2) if jitter else delay
