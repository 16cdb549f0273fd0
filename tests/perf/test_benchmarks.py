"""Performance benchmarks for notionrelay.

Run with: pytest tests/perf/ -v -s
"""
import time

from notionrelay.config import NotionRelayConfig
from notionrelay.converter.block_normalizer import normalize_blocks
from notionrelay.converter.notion_to_md import NotionToMarkdownRenderer
from notionrelay.converter.rich_text import normalize_run
from notionrelay.utils.text_split import split_text


def _paragraph(text: str) -> dict:
    return {
        "object": "block",
        "type": "paragraph",
        "paragraph": {"rich_text": [{"type": "text", "text": {"content": text}, "plain_text": text}]},
    }


class TestSplitPerformance:
    def test_split_50k_chars_under_200ms(self):
        text = "Notion rich text \U0001f600 " * 2_500
        start = time.perf_counter()
        pieces = split_text(text)
        elapsed_ms = (time.perf_counter() - start) * 1000
        assert len(pieces) >= 20
        assert elapsed_ms < 200, f"split_text too slow: {elapsed_ms:.2f}ms"

    def test_normalize_run_at_array_limit_under_500ms(self):
        run = [{"type": "text", "text": {"content": "w" * 4000}} for _ in range(50)]
        start = time.perf_counter()
        result = normalize_run(run)
        elapsed_ms = (time.perf_counter() - start) * 1000
        assert len(result) == 100
        assert elapsed_ms < 500, f"normalize_run too slow: {elapsed_ms:.2f}ms"


class TestNormalizerPerformance:
    def test_normalize_200_long_blocks_under_1s(self):
        blocks = [_paragraph(f"Block {i:04d} " * 210) for i in range(200)]
        start = time.perf_counter()
        result = normalize_blocks(blocks)
        elapsed_ms = (time.perf_counter() - start) * 1000
        assert len(result) == 200
        assert elapsed_ms < 1000, f"200-block normalization too slow: {elapsed_ms:.2f}ms"


class TestRendererPerformance:
    def test_render_1000_blocks_under_1s(self):
        renderer = NotionToMarkdownRenderer(NotionRelayConfig())
        blocks = [_paragraph(f"Paragraph {i} with some text") for i in range(1000)]
        start = time.perf_counter()
        output = renderer.render_blocks(blocks)
        elapsed_ms = (time.perf_counter() - start) * 1000
        assert output.count("\n\n") == 1000
        assert elapsed_ms < 1000, f"1000-block render too slow: {elapsed_ms:.2f}ms"
