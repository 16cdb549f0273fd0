"""Apply rich_text limits across a tree of outbound Notion blocks.

A block keeps its payload under the key named by its ``type``::

    {"type": "toggle", "toggle": {"rich_text": [...], "children": [...]}}

:func:`normalize_block` rewrites ``rich_text`` for the block types listed
in :data:`RICH_TEXT_BLOCK_TYPES` and recurses into ``children`` for every
type.  The input tree is left untouched: modified dicts are shallow copies
and unmodified subtrees are shared with the input.
"""

from __future__ import annotations

from typing import Any

from .rich_text import OverflowPolicy, normalize_run

# Block types whose payload holds a top-level ``rich_text`` array.  New
# Notion block types must be added here to be normalized.
RICH_TEXT_BLOCK_TYPES: frozenset[str] = frozenset({
    "paragraph",
    "heading_1",
    "heading_2",
    "heading_3",
    "bulleted_list_item",
    "numbered_list_item",
    "to_do",
    "toggle",
    "callout",
    "quote",
    "code",
})


def normalize_block(
    block: dict[str, Any],
    *,
    overflow: OverflowPolicy = "truncate",
    metrics: Any | None = None,
) -> dict[str, Any]:
    """Return *block* with every rich_text run in its subtree normalized.

    Parameters
    ----------
    block:
        A (possibly partial) Notion block dict.
    overflow:
        Policy for runs that exceed 100 segments; see
        :func:`~notionrelay.converter.rich_text.normalize_run`.
    metrics:
        Optional metrics hook forwarded to ``normalize_run``.

    Returns
    -------
    dict
        *block* itself when it has no ``type`` tag or no dict payload under
        that tag; otherwise a new dict of the same shape.
    """
    if not isinstance(block, dict):
        return block

    block_type = block.get("type")
    if not block_type:
        return block

    data = block.get(block_type)
    if not isinstance(data, dict):
        return block

    new_data = dict(data)

    rich_text = data.get("rich_text")
    if block_type in RICH_TEXT_BLOCK_TYPES and isinstance(rich_text, list):
        new_data["rich_text"] = normalize_run(rich_text, overflow=overflow, metrics=metrics)

    children = data.get("children")
    if isinstance(children, list):
        new_data["children"] = [
            normalize_block(child, overflow=overflow, metrics=metrics)
            for child in children
        ]

    new_block = dict(block)
    new_block[block_type] = new_data
    return new_block


def normalize_blocks(
    blocks: list[dict[str, Any]],
    *,
    overflow: OverflowPolicy = "truncate",
    metrics: Any | None = None,
) -> list[dict[str, Any]]:
    """Apply :func:`normalize_block` to each block, preserving order."""
    return [normalize_block(b, overflow=overflow, metrics=metrics) for b in blocks]
