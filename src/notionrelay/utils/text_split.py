"""Surrogate-safe string splitting measured in UTF-16 code units.

Notion limits ``rich_text[].text.content`` to 2 000 characters, and it
counts characters the way JavaScript does: in UTF-16 code units.  A Python
``str`` is indexed by code point, so an emoji such as U+1F600 is one
Python character but two Notion characters.  This module measures and
splits text in Notion's units.

A boundary never falls between the two halves of a surrogate pair.  It
can still fall inside a multi-code-point grapheme cluster (ZWJ emoji
sequences, regional-indicator flags, combining marks).
"""

from __future__ import annotations

RICH_TEXT_CHAR_LIMIT = 2000
"""Maximum UTF-16 length of a single ``text.content`` value."""


def _unit_width(char: str) -> int:
    return 2 if ord(char) > 0xFFFF else 1


def _is_high_surrogate(char: str) -> bool:
    return 0xD800 <= ord(char) <= 0xDBFF


def utf16_len(text: str) -> int:
    """Return the length of *text* in UTF-16 code units.

    >>> utf16_len("abc")
    3
    >>> utf16_len("a\\U0001f600")
    3
    """
    return len(text.encode("utf-16-le", "surrogatepass")) // 2


def split_text(text: str, limit: int = RICH_TEXT_CHAR_LIMIT) -> list[str]:
    """Split *text* into pieces of at most *limit* UTF-16 code units.

    Parameters
    ----------
    text:
        The string to partition.
    limit:
        Maximum UTF-16 length per piece.  Defaults to **2000**.

    Returns
    -------
    list[str]
        ``[text]`` unchanged when it already fits (including the empty
        string).  Otherwise consecutive pieces whose concatenation equals
        *text*.  A piece is one unit short of *limit* when the next
        character is an astral code point that would straddle the
        boundary.  A lone high surrogate is likewise kept with the unit
        that follows it.

    Raises
    ------
    ValueError
        If *limit* is less than 1.

    Examples
    --------
    >>> split_text("hello world", 5)
    ['hello', ' worl', 'd']

    >>> [utf16_len(p) for p in split_text("abcd\\U0001f600ef", 5)]
    [4, 4]
    """
    if limit < 1:
        raise ValueError(f"limit must be >= 1, got {limit}")

    if utf16_len(text) <= limit:
        return [text]

    pieces: list[str] = []
    start = 0
    units = 0

    for index, char in enumerate(text):
        width = _unit_width(char)
        if units + width > limit and index > start:
            end = index
            if _is_high_surrogate(text[end - 1]) and end - 1 > start:
                end -= 1
            pieces.append(text[start:end])
            units = sum(_unit_width(c) for c in text[end:index])
            start = end
            # A carried-over surrogate can still leave no room when limit <= 2.
            if units + width > limit and index > start:
                pieces.append(text[start:index])
                start = index
                units = 0
        units += width

    pieces.append(text[start:])
    return pieces
