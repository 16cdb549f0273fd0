"""Render Notion API responses as Markdown.

:meth:`NotionToMarkdownRenderer.render_response` accepts whatever the
client returned (a block, a page, a database, or a paginated ``list``) and
produces a readable Markdown summary.  Block content is rendered in full;
pages and databases are reduced to their title.

Usage::

    from notionrelay.config import NotionRelayConfig
    from notionrelay.converter.notion_to_md import NotionToMarkdownRenderer

    renderer = NotionToMarkdownRenderer(NotionRelayConfig())
    md = renderer.render_response(client.retrieve_block_children(page_id))
"""

from __future__ import annotations

from collections.abc import Callable as _Callable
from typing import Any

from notionrelay.config import NotionRelayConfig
from notionrelay.errors import NotionRelayUnsupportedBlockError

from .inline_renderer import markdown_escape, render_rich_text
from .rich_text import extract_plain_text

# Block types with nothing worth rendering.
_OMITTED_TYPES: frozenset[str] = frozenset({
    "breadcrumb",
    "table_of_contents",
})

# Layout wrappers whose children are rendered in place.
_PASSTHROUGH_TYPES: frozenset[str] = frozenset({
    "column_list",
    "column",
    "synced_block",
    "template",
})

# File-like blocks rendered as ``[Label](url)``.
_MEDIA_TYPES: dict[str, str] = {
    "video": "Video",
    "audio": "Audio",
    "pdf": "PDF",
    "file": "File",
}


class NotionToMarkdownRenderer:
    """Convert Notion blocks and objects to Markdown.

    Parameters
    ----------
    config:
        Client configuration; ``unsupported_block_policy`` decides what
        happens to block types without a Markdown form.
    """

    def __init__(self, config: NotionRelayConfig) -> None:
        self._config = config

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def render_response(self, response: dict[str, Any]) -> str:
        """Render any Notion API response object.

        * ``list`` -- block results are rendered as a document; page and
          database results as a bullet list of titles.
        * ``block`` -- the block and any inline ``children``.
        * ``page`` / ``database`` -- a level-1 heading with the title.
        * anything else -- an empty string.
        """
        object_type = response.get("object", "")

        if object_type == "list":
            results = response.get("results", [])
            blocks = [r for r in results if r.get("object") == "block"]
            if blocks and len(blocks) == len(results):
                return self.render_blocks(blocks)
            return "".join(f"- {self._render_object_link(r)}\n" for r in results)

        if object_type == "block":
            return self.render_blocks([response])

        if object_type in ("page", "database"):
            return f"# {markdown_escape(object_title(response))}\n\n"

        return ""

    def render_blocks(self, blocks: list[dict], depth: int = 0) -> str:
        """Render an ordered list of blocks, numbering consecutive
        ``numbered_list_item`` blocks."""
        parts: list[str] = []
        number = 0

        for block in blocks:
            if block.get("type") == "numbered_list_item":
                number += 1
                parts.append(self._render_list_item(block, depth, f"{number}."))
            else:
                number = 0
                parts.append(self._dispatch(block, depth))

        return "".join(parts)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _dispatch(self, block: dict, depth: int) -> str:
        block_type = block.get("type", "")

        if block_type in _OMITTED_TYPES:
            return ""
        if block_type in _PASSTHROUGH_TYPES:
            return self.render_blocks(_children(block), depth)

        renderer = _BLOCK_RENDERERS.get(block_type)
        if renderer is not None:
            return renderer(self, block, depth)

        if block_type in _MEDIA_TYPES:
            return self._render_media(block, block_type)

        return self._render_unsupported(block)

    # ------------------------------------------------------------------
    # Block renderers
    # ------------------------------------------------------------------

    def _render_heading(self, block: dict, depth: int) -> str:
        block_type = block["type"]
        level = int(block_type[-1])
        text = render_rich_text(block.get(block_type, {}).get("rich_text", []))
        return f"{'#' * level} {text}\n\n" + self.render_blocks(_children(block), depth)

    def _render_paragraph(self, block: dict, depth: int) -> str:
        text = render_rich_text(block.get("paragraph", {}).get("rich_text", []))
        indent = "  " * depth
        return f"{indent}{text}\n\n" + self.render_blocks(_children(block), depth + 1)

    def _render_quote_like(self, block: dict, depth: int) -> str:
        block_type = block["type"]
        block_data = block.get(block_type, {})
        text = render_rich_text(block_data.get("rich_text", []))

        if block_type == "callout":
            icon = block_data.get("icon") or {}
            if icon.get("type") == "emoji":
                text = f"{icon.get('emoji', '')} {text}"

        lines = text.split("\n")
        child_md = self.render_blocks(_children(block), depth + 1).rstrip("\n")
        if child_md:
            lines.extend(child_md.split("\n"))
        return "\n".join(f"> {line}" if line.strip() else ">" for line in lines) + "\n\n"

    def _render_bulleted_list_item(self, block: dict, depth: int) -> str:
        return self._render_list_item(block, depth, "-")

    def _render_toggle(self, block: dict, depth: int) -> str:
        return self._render_list_item(block, depth, "-")

    def _render_to_do(self, block: dict, depth: int) -> str:
        checked = block.get("to_do", {}).get("checked", False)
        return self._render_list_item(block, depth, "- [x]" if checked else "- [ ]")

    def _render_list_item(self, block: dict, depth: int, marker: str) -> str:
        block_type = block.get("type", "")
        text = render_rich_text(block.get(block_type, {}).get("rich_text", []))
        indent = "  " * depth
        return f"{indent}{marker} {text}\n" + self.render_blocks(_children(block), depth + 1)

    def _render_code(self, block: dict, depth: int) -> str:
        block_data = block.get("code", {})
        language = block_data.get("language", "")
        if language == "plain text":
            language = ""
        code_text = extract_plain_text(block_data.get("rich_text", []))
        return f"```{language}\n{code_text}\n```\n\n"

    def _render_divider(self, block: dict, depth: int) -> str:
        return "---\n\n"

    def _render_equation(self, block: dict, depth: int) -> str:
        expression = block.get("equation", {}).get("expression", "")
        return f"$$\n{expression}\n$$\n\n"

    def _render_table(self, block: dict, depth: int) -> str:
        width = block.get("table", {}).get("table_width", 0)
        rows = [c for c in _children(block) if c.get("type") == "table_row"]
        if not rows:
            return ""

        lines: list[str] = []
        for i, row in enumerate(rows):
            cells = [render_rich_text(cell) for cell in row.get("table_row", {}).get("cells", [])]
            cells.extend([""] * (width - len(cells)))
            lines.append("| " + " | ".join(cells) + " |")
            if i == 0:
                lines.append("|" + "|".join(["---"] * max(width, len(cells))) + "|")
        return "\n".join(lines) + "\n\n"

    def _render_image(self, block: dict, depth: int) -> str:
        block_data = block.get("image", {})
        url = _file_url(block_data)
        caption = render_rich_text(block_data.get("caption", []))
        return f"![{caption}]({markdown_escape(url, 'url')})\n\n"

    def _render_bookmark(self, block: dict, depth: int) -> str:
        block_type = block.get("type", "")
        url = block.get(block_type, {}).get("url", "")
        return f"[{url}]({markdown_escape(url, 'url')})\n\n"

    def _render_child_object(self, block: dict, depth: int) -> str:
        block_type = block.get("type", "")
        title = block.get(block_type, {}).get("title", "Untitled")
        label = "Page" if block_type == "child_page" else "Database"
        return f"[{label}: {markdown_escape(title)}]({_notion_url(block.get('id', ''))})\n\n"

    def _render_media(self, block: dict, block_type: str) -> str:
        block_data = block.get(block_type, {})
        url = _file_url(block_data)
        label = block_data.get("name") or _MEDIA_TYPES[block_type]
        return f"[{markdown_escape(label)}]({markdown_escape(url, 'url')})\n\n"

    def _render_object_link(self, obj: dict) -> str:
        title = markdown_escape(object_title(obj))
        url = obj.get("url") or _notion_url(obj.get("id", ""))
        return f"[{title}]({markdown_escape(url, 'url')})"

    def _render_unsupported(self, block: dict) -> str:
        policy = self._config.unsupported_block_policy
        block_type = block.get("type", "unknown")

        if policy == "skip":
            return ""

        if policy == "raise":
            raise NotionRelayUnsupportedBlockError(
                message=f"Cannot render block type: {block_type}",
                context={"block_id": block.get("id", ""), "block_type": block_type},
            )

        block_data = block.get(block_type)
        text = ""
        if isinstance(block_data, dict):
            text = extract_plain_text(block_data.get("rich_text", []))
        if text:
            return f"<!-- notion:{block_type} -->\n{text}\n\n"
        return f"<!-- notion:{block_type} -->\n\n"


_BlockRenderer = _Callable[["NotionToMarkdownRenderer", dict, int], str]

_BLOCK_RENDERERS: dict[str, _BlockRenderer] = {
    "heading_1": NotionToMarkdownRenderer._render_heading,
    "heading_2": NotionToMarkdownRenderer._render_heading,
    "heading_3": NotionToMarkdownRenderer._render_heading,
    "paragraph": NotionToMarkdownRenderer._render_paragraph,
    "quote": NotionToMarkdownRenderer._render_quote_like,
    "callout": NotionToMarkdownRenderer._render_quote_like,
    "bulleted_list_item": NotionToMarkdownRenderer._render_bulleted_list_item,
    "toggle": NotionToMarkdownRenderer._render_toggle,
    "to_do": NotionToMarkdownRenderer._render_to_do,
    "code": NotionToMarkdownRenderer._render_code,
    "divider": NotionToMarkdownRenderer._render_divider,
    "equation": NotionToMarkdownRenderer._render_equation,
    "table": NotionToMarkdownRenderer._render_table,
    "image": NotionToMarkdownRenderer._render_image,
    "bookmark": NotionToMarkdownRenderer._render_bookmark,
    "embed": NotionToMarkdownRenderer._render_bookmark,
    "link_preview": NotionToMarkdownRenderer._render_bookmark,
    "child_page": NotionToMarkdownRenderer._render_child_object,
    "child_database": NotionToMarkdownRenderer._render_child_object,
}


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------

def object_title(obj: dict) -> str:
    """Return the title of a page or database object.

    Databases carry a top-level ``title`` run; pages keep it in whichever
    property has type ``"title"``.
    """
    title = obj.get("title")
    if isinstance(title, list):
        return extract_plain_text(title) or "Untitled"

    for prop in obj.get("properties", {}).values():
        if isinstance(prop, dict) and prop.get("type") == "title":
            return extract_plain_text(prop.get("title", [])) or "Untitled"
    return "Untitled"


def _children(block: dict) -> list[dict]:
    block_data = block.get(block.get("type", ""), {})
    if isinstance(block_data, dict) and block_data.get("children"):
        return block_data["children"]
    return block.get("children") or []


def _file_url(block_data: dict) -> str:
    source = block_data.get("type", "")
    if source in ("external", "file"):
        return block_data.get(source, {}).get("url", "")
    return block_data.get("url", "")


def _notion_url(object_id: str) -> str:
    return f"https://notion.so/{object_id.replace('-', '')}"
