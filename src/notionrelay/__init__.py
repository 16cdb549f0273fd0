"""notionrelay: Notion API client with rich_text limit normalization.

Public re-exports
-----------------

* **Clients:** :class:`NotionRelayClient`, :class:`AsyncNotionRelayClient`
* **Configuration:** :class:`NotionRelayConfig`
* **Normalizer:** :func:`split_text`, :func:`split_segment`,
  :func:`normalize_run`, :func:`normalize_block`
* **Errors:** every :class:`NotionRelayError` subclass and :class:`ErrorCode`

Usage::

    from notionrelay import NotionRelayClient

    client = NotionRelayClient(token="secret_xxx")
    client.update_block(block_id, {
        "type": "paragraph",
        "paragraph": {"rich_text": [{"type": "text", "text": {"content": long_text}}]},
    })
"""

from __future__ import annotations

# ── Clients ────────────────────────────────────────────────────────────
from notionrelay.async_client import AsyncNotionRelayClient
from notionrelay.client import NotionRelayClient

# ── Configuration ───────────────────────────────────────────────────────
from notionrelay.config import NotionRelayConfig

# ── Normalizer ──────────────────────────────────────────────────────────
from notionrelay.converter.block_normalizer import (
    RICH_TEXT_BLOCK_TYPES,
    normalize_block,
    normalize_blocks,
)
from notionrelay.converter.rich_text import (
    RICH_TEXT_ARRAY_LIMIT,
    normalize_run,
    split_segment,
)

# ── Errors ──────────────────────────────────────────────────────────────
from notionrelay.errors import (
    ErrorCode,
    NotionRelayAuthError,
    NotionRelayConflictError,
    NotionRelayError,
    NotionRelayNetworkError,
    NotionRelayNotFoundError,
    NotionRelayPermissionError,
    NotionRelayRetryExhaustedError,
    NotionRelayTextOverflowError,
    NotionRelayUnsupportedBlockError,
    NotionRelayValidationError,
)
from notionrelay.utils.text_split import RICH_TEXT_CHAR_LIMIT, split_text, utf16_len

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Clients
    "NotionRelayClient",
    "AsyncNotionRelayClient",
    # Configuration
    "NotionRelayConfig",
    # Normalizer
    "RICH_TEXT_ARRAY_LIMIT",
    "RICH_TEXT_BLOCK_TYPES",
    "RICH_TEXT_CHAR_LIMIT",
    "normalize_block",
    "normalize_blocks",
    "normalize_run",
    "split_segment",
    "split_text",
    "utf16_len",
    # Errors
    "NotionRelayError",
    "ErrorCode",
    "NotionRelayValidationError",
    "NotionRelayAuthError",
    "NotionRelayPermissionError",
    "NotionRelayNotFoundError",
    "NotionRelayConflictError",
    "NotionRelayRetryExhaustedError",
    "NotionRelayNetworkError",
    "NotionRelayTextOverflowError",
    "NotionRelayUnsupportedBlockError",
]
