"""Metrics hook protocol and its no-op default.

The transport and the rich-text normalizer report counters and timings
through whatever object the caller puts in ``NotionRelayConfig.metrics``.
Anything with ``increment`` / ``timing`` / ``gauge`` methods works;
:class:`NoopMetricsHook` is used otherwise.

Emitted names:

* ``notionrelay.requests_total``             -- counter
* ``notionrelay.retries_total``              -- counter
* ``notionrelay.rate_limited_total``         -- counter
* ``notionrelay.request_duration_ms``        -- timing
* ``notionrelay.rate_limit_wait_ms``         -- timing
* ``notionrelay.rich_text_truncated_total``  -- counter (segments dropped)
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class MetricsHook(Protocol):
    """Structural interface for a metrics backend.

    *tags* are string key/value pairs; backends map them onto their own
    labelling scheme (Prometheus labels, StatsD tags, ...).
    """

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Add *value* to the counter *name*.

        Parameters
        ----------
        name:
            Dot-delimited metric name, e.g.
            ``"notionrelay.rich_text_truncated_total"``.
        value:
            Amount to add.  The normalizer passes the number of dropped
            segments; the transport always passes ``1``.
        tags:
            Optional string key/value pairs such as ``method`` and ``path``.
        """
        ...

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Record a duration.

        Parameters
        ----------
        name:
            Dot-delimited metric name, e.g. ``"notionrelay.request_duration_ms"``.
        ms:
            Elapsed time in milliseconds.
        tags:
            Optional string key/value pairs for the data point.
        """
        ...

    def gauge(
        self,
        name: str,
        value: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Set a point-in-time value.

        Parameters
        ----------
        name:
            Dot-delimited metric name.
        value:
            The value to report.
        tags:
            Optional string key/value pairs for the data point.
        """
        ...


class NoopMetricsHook:
    """Discards every data point."""

    __slots__ = ()

    def increment(self, name: str, value: int = 1, tags: dict[str, str] | None = None) -> None:
        return None

    def timing(self, name: str, ms: float, tags: dict[str, str] | None = None) -> None:
        return None

    def gauge(self, name: str, value: float, tags: dict[str, str] | None = None) -> None:
        return None
