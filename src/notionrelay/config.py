"""Client configuration for notionrelay.

:class:`NotionRelayConfig` holds every option accepted by
:class:`~notionrelay.client.NotionRelayClient` and
:class:`~notionrelay.async_client.AsyncNotionRelayClient`.  One instance is
shared by the client, its transport and its Markdown renderer, and is
validated once on construction.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Literal
from urllib.parse import urlparse

_LOCAL_HOSTS = ("localhost", "127.0.0.1", "::1")

_OVERFLOW_POLICIES = ("truncate", "raise")
_UNSUPPORTED_POLICIES = ("comment", "skip", "raise")

# (field, lower bound, bound is inclusive)
_NUMERIC_BOUNDS: tuple[tuple[str, float, bool], ...] = (
    ("retry_max_attempts", 1, True),
    ("retry_base_delay", 0, True),
    ("retry_max_delay", 0, True),
    ("rate_limit_rps", 0, False),
    ("timeout_seconds", 0, False),
)


@dataclass
class NotionRelayConfig:
    """Options for a notionrelay client.

    Only ``token`` has to be supplied for real use.

    Parameters
    ----------
    token:
        Notion integration token.  Masked in ``repr`` and debug dumps.
    notion_version:
        Sent as the ``Notion-Version`` header.
    base_url:
        API root.  Plain ``http`` is accepted for local hosts only.
    rich_text_overflow:
        Applied when a rich_text array holds more than 100 segments after
        long segments are split.  ``"truncate"`` keeps the first 100 and
        logs a warning; ``"raise"`` raises
        :class:`~notionrelay.errors.NotionRelayTextOverflowError`.
    unsupported_block_policy:
        How :meth:`~notionrelay.client.NotionRelayClient.to_markdown`
        treats block types with no Markdown form: ``"comment"`` writes
        ``<!-- notion:<type> -->``, ``"skip"`` drops the block, ``"raise"``
        raises :class:`~notionrelay.errors.NotionRelayUnsupportedBlockError`.
    retry_max_attempts:
        Attempts per request, counting the first one.  ``1`` disables
        retries; ``0`` is rejected.
    retry_base_delay, retry_max_delay:
        Exponential backoff starts at the base and never exceeds the max
        (seconds).  A ``Retry-After`` header overrides both.
    retry_jitter:
        Scale each backoff delay by a random factor in [0.5, 1.0).
    rate_limit_rps:
        Average request rate enforced by the client-side token bucket.
    timeout_seconds:
        Per-request HTTP timeout.
    http_proxy:
        Proxy URL handed to httpx.
    metrics:
        A :class:`~notionrelay.observability.MetricsHook`; ``None`` discards
        metrics.
    debug_dump_payload:
        Print each redacted request/response pair to *stderr*.
    """

    token: str = ""
    notion_version: str = "2022-06-28"
    base_url: str = "https://api.notion.com/v1"

    rich_text_overflow: Literal["truncate", "raise"] = "truncate"
    unsupported_block_policy: Literal["comment", "skip", "raise"] = "comment"

    retry_max_attempts: int = 5
    retry_base_delay: float = 1.0
    retry_max_delay: float = 60.0
    retry_jitter: bool = True
    rate_limit_rps: float = 3.0

    timeout_seconds: float = 30.0
    http_proxy: str | None = None

    metrics: Any | None = None
    debug_dump_payload: bool = False

    def __post_init__(self) -> None:
        host = urlparse(self.base_url).hostname
        if self.base_url.startswith("http://") and host not in _LOCAL_HOSTS:
            raise ValueError(
                f"base_url uses insecure HTTP for non-local host {host!r}; "
                "use HTTPS so the token is not sent in clear text"
            )

        if self.rich_text_overflow not in _OVERFLOW_POLICIES:
            raise ValueError(
                f"rich_text_overflow must be one of {_OVERFLOW_POLICIES}, "
                f"got {self.rich_text_overflow!r}"
            )
        if self.unsupported_block_policy not in _UNSUPPORTED_POLICIES:
            raise ValueError(
                f"unsupported_block_policy must be one of {_UNSUPPORTED_POLICIES}, "
                f"got {self.unsupported_block_policy!r}"
            )

        for name, bound, inclusive in _NUMERIC_BOUNDS:
            value = getattr(self, name)
            if value < bound or (value == bound and not inclusive):
                op = ">=" if inclusive else ">"
                raise ValueError(f"{name} must be {op} {bound}, got {value}")

    def __repr__(self) -> str:
        def show(name: str, value: Any) -> str:
            if name == "token":
                return f"token='{'...' + value[-4:] if len(value) >= 4 else '****'}'"
            return f"{name}={value!r}"

        body = ", ".join(show(f.name, getattr(self, f.name)) for f in dataclasses.fields(self))
        return f"NotionRelayConfig({body})"
