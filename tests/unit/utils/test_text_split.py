"""Tests for utils/text_split.py: UTF-16 measurement and surrogate-safe splitting."""

from __future__ import annotations

import pytest

from notionrelay.utils.text_split import RICH_TEXT_CHAR_LIMIT, split_text, utf16_len

GRIN = "\U0001f600"  # two UTF-16 code units
HIGH = "\ud83d"  # lone high surrogate


class TestUtf16Len:
    def test_empty(self):
        assert utf16_len("") == 0

    def test_ascii(self):
        assert utf16_len("abc") == 3

    def test_bmp_characters_count_once(self):
        assert utf16_len("café 中文") == 7

    def test_astral_character_counts_twice(self):
        assert utf16_len(GRIN) == 2
        assert utf16_len("a" + GRIN + "b") == 4

    def test_lone_surrogate_counts_once(self):
        assert utf16_len(HIGH) == 1


class TestSplitTextFits:
    def test_empty_string_is_single_piece(self):
        assert split_text("") == [""]

    def test_short_text_returned_unchanged(self):
        assert split_text("hello") == ["hello"]

    def test_exact_limit_is_single_piece(self):
        text = "a" * RICH_TEXT_CHAR_LIMIT
        assert split_text(text) == [text]

    def test_astral_text_at_exact_limit_is_single_piece(self):
        text = GRIN * (RICH_TEXT_CHAR_LIMIT // 2)
        assert split_text(text) == [text]


class TestSplitTextSplits:
    def test_4500_ascii_chars(self):
        pieces = split_text("x" * 4500)
        assert [len(p) for p in pieces] == [2000, 2000, 500]

    def test_one_over_limit(self):
        pieces = split_text("y" * 2001)
        assert [len(p) for p in pieces] == [2000, 1]

    def test_small_limit(self):
        assert split_text("hello world", 5) == ["hello", " worl", "d"]

    def test_concatenation_restores_text(self):
        text = "The quick brown fox " * 300
        assert "".join(split_text(text)) == text

    def test_every_piece_within_limit(self):
        text = ("ab" + GRIN) * 1500
        assert all(utf16_len(p) <= RICH_TEXT_CHAR_LIMIT for p in split_text(text))

    def test_astral_char_straddling_boundary_moves_to_next_piece(self):
        text = "a" * 1999 + GRIN + "b"
        pieces = split_text(text)
        assert pieces == ["a" * 1999, GRIN + "b"]
        assert utf16_len(pieces[0]) == 1999

    def test_astral_char_ending_exactly_at_limit_stays(self):
        text = "a" * 1998 + GRIN + "b"
        pieces = split_text(text)
        assert pieces == ["a" * 1998 + GRIN, "b"]

    def test_small_limit_with_astral(self):
        pieces = split_text("abcd" + GRIN + "ef", 5)
        assert pieces == ["abcd", GRIN + "ef"]

    def test_all_astral_text(self):
        text = GRIN * 1500
        pieces = split_text(text)
        assert [utf16_len(p) for p in pieces] == [2000, 1000]
        assert "".join(pieces) == text


class TestSplitTextEdgeCases:
    def test_limit_zero_raises(self):
        with pytest.raises(ValueError, match="limit"):
            split_text("abc", 0)

    def test_negative_limit_raises(self):
        with pytest.raises(ValueError):
            split_text("abc", -5)

    def test_limit_one_ascii(self):
        assert split_text("abc", 1) == ["a", "b", "c"]

    def test_limit_one_emits_astral_char_alone(self):
        assert split_text("a" + GRIN + "b", 1) == ["a", GRIN, "b"]

    def test_limit_one_consecutive_astral_chars(self):
        assert split_text(GRIN * 2, 1) == [GRIN, GRIN]

    def test_lone_high_surrogate_not_left_at_piece_end(self):
        pieces = split_text("ab" + HIGH + "cd", 3)
        assert pieces == ["ab", HIGH + "cd"]
        assert not any(p.endswith(HIGH) for p in pieces[:-1])

    def test_newlines_preserved(self):
        text = "line\n" * 1000
        assert "".join(split_text(text)) == text
