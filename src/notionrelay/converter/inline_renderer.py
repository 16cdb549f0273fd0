"""Render Notion rich_text arrays as inline Markdown.

Annotations wrap the text innermost-first in the order
code, bold, italic, strikethrough, underline; a link wraps everything.
"""

from __future__ import annotations

import re

_ESCAPE_RE = re.compile(r'([\\`*_{}\[\]()#+\-.!|])')


def markdown_escape(text: str, context: str = "inline") -> str:
    """Escape *text* for use in Markdown.

    ``context`` is ``"inline"`` (escape every special character),
    ``"code"`` (no escaping) or ``"url"`` (percent-encode parentheses).
    """
    if context == "code":
        return text
    if context == "url":
        return text.replace("(", "%28").replace(")", "%29")
    return _ESCAPE_RE.sub(r'\\\1', text)


def _segment_text(segment: dict) -> str:
    seg_type = segment.get("type", "text")
    plain_text = segment.get("plain_text")
    if seg_type == "text":
        return plain_text or segment.get("text", {}).get("content", "")
    if seg_type == "mention" and plain_text is None:
        mention = segment.get("mention", {})
        mention_type = mention.get("type", "")
        if mention_type == "user":
            return "@" + mention.get("user", {}).get("name", "user")
        if mention_type == "date":
            return mention.get("date", {}).get("start", "")
        return mention.get(mention_type, {}).get("id", "")
    return plain_text or ""


def render_rich_text(segments: list[dict]) -> str:
    """Render a rich_text array to a Markdown string.

    ``equation`` segments become ``$expression$``; ``text`` and ``mention``
    segments render their text with annotations applied.
    """
    parts: list[str] = []

    for seg in segments:
        annotations = seg.get("annotations", {})
        href = seg.get("href")

        if seg.get("type") == "equation":
            expression = seg.get("equation", {}).get("expression", "")
            text = f"${expression}$"
        elif annotations.get("code", False):
            text = f"`{_segment_text(seg)}`"
        else:
            text = markdown_escape(_segment_text(seg))
            if annotations.get("bold", False):
                text = f"**{text}**"
            if annotations.get("italic", False):
                text = f"_{text}_"
            if annotations.get("strikethrough", False):
                text = f"~~{text}~~"
            if annotations.get("underline", False):
                text = f"<u>{text}</u>"

        if href:
            text = f"[{text}]({markdown_escape(href, 'url')})"

        parts.append(text)

    return "".join(parts)
