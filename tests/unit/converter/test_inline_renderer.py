"""Tests for converter/inline_renderer.py."""

from __future__ import annotations

from notionrelay.converter.inline_renderer import markdown_escape, render_rich_text


def _seg(text: str, href: str | None = None, **annotations) -> dict:
    return {
        "type": "text",
        "text": {"content": text},
        "plain_text": text,
        "annotations": annotations,
        "href": href,
    }


class TestMarkdownEscape:
    def test_inline_escapes_specials(self):
        assert markdown_escape("a*b_c") == "a\\*b\\_c"

    def test_code_context_untouched(self):
        assert markdown_escape("a*b", context="code") == "a*b"

    def test_url_context_encodes_parens(self):
        assert markdown_escape("https://x/(y)", context="url") == "https://x/%28y%29"


class TestRenderRichText:
    def test_plain(self):
        assert render_rich_text([_seg("Hello world")]) == "Hello world"

    def test_bold_and_italic(self):
        assert render_rich_text([_seg("hi", bold=True, italic=True)]) == "_**hi**_"

    def test_strikethrough_and_underline(self):
        result = render_rich_text([_seg("gone", strikethrough=True, underline=True)])
        assert result == "<u>~~gone~~</u>"

    def test_inline_code_not_escaped(self):
        assert render_rich_text([_seg("a_b", code=True)]) == "`a_b`"

    def test_link(self):
        assert render_rich_text([_seg("site", href="https://example.com")]) == (
            "[site](https://example.com)"
        )

    def test_equation(self):
        seg = {"type": "equation", "equation": {"expression": "E=mc^2"}}
        assert render_rich_text([seg]) == "$E=mc^2$"

    def test_user_mention_without_plain_text(self):
        seg = {"type": "mention", "mention": {"type": "user", "user": {"name": "Ada"}}}
        assert render_rich_text([seg]) == "@Ada"

    def test_mention_with_plain_text(self):
        seg = {"type": "mention", "mention": {"type": "page", "page": {"id": "p1"}}, "plain_text": "Roadmap"}
        assert render_rich_text([seg]) == "Roadmap"

    def test_split_segments_join_seamlessly(self):
        assert render_rich_text([_seg("abc"), _seg("def")]) == "abcdef"
