"""notionrelay.converter -- payload normalization and Markdown rendering.

* :mod:`.rich_text` -- split oversized rich_text segments, cap array length.
* :mod:`.block_normalizer` -- apply the rich_text limits across block trees.
* :mod:`.inline_renderer` -- rich_text arrays to inline Markdown.
* :mod:`.notion_to_md` -- API responses to Markdown documents.
"""

from __future__ import annotations

from .block_normalizer import RICH_TEXT_BLOCK_TYPES, normalize_block, normalize_blocks
from .notion_to_md import NotionToMarkdownRenderer
from .rich_text import RICH_TEXT_ARRAY_LIMIT, normalize_run, split_segment

__all__ = [
    "RICH_TEXT_ARRAY_LIMIT",
    "RICH_TEXT_BLOCK_TYPES",
    "NotionToMarkdownRenderer",
    "normalize_block",
    "normalize_blocks",
    "normalize_run",
    "split_segment",
]
