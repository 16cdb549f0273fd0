"""Bring Notion rich_text arrays within the API's size limits.

A rich_text array (a *run*) is an ordered list of segment dicts::

    {
        "type": "text",
        "text": {"content": "hello", "link": None},
        "annotations": {"bold": True, ...},
        "plain_text": "hello",
        "href": None,
    }

Notion rejects a ``text.content`` longer than 2 000 UTF-16 code units and an
array longer than 100 segments.  :func:`split_segment` breaks one long text
segment into several that carry identical formatting, and
:func:`normalize_run` applies it across a run and enforces the element cap.

Non-text segments (``mention``, ``equation``) are never split.
"""

from __future__ import annotations

import copy
from typing import Any, Literal

from notionrelay.errors import NotionRelayTextOverflowError
from notionrelay.observability import NoopMetricsHook, get_logger
from notionrelay.utils.text_split import RICH_TEXT_CHAR_LIMIT, split_text, utf16_len

RICH_TEXT_ARRAY_LIMIT = 100
"""Maximum number of segments in a single rich_text array."""

log = get_logger("notionrelay.rich_text")

OverflowPolicy = Literal["truncate", "raise"]


def split_segment(segment: dict[str, Any], limit: int = RICH_TEXT_CHAR_LIMIT) -> list[dict[str, Any]]:
    """Split one rich_text segment whose content exceeds *limit*.

    Parameters
    ----------
    segment:
        A Notion rich_text segment dict.
    limit:
        Maximum UTF-16 length of ``text.content``.

    Returns
    -------
    list[dict]
        ``[segment]`` itself when it is not a ``"text"`` segment, has no
        content, or already fits.  Otherwise one clone per piece, in
        reading order, each with ``text.content`` and ``plain_text`` set
        to the piece and every other attribute copied unchanged.
    """
    if segment.get("type") != "text":
        return [segment]

    text = segment.get("text")
    content = text.get("content") if isinstance(text, dict) else None
    if not content or utf16_len(content) <= limit:
        return [segment]

    pieces: list[dict[str, Any]] = []
    for chunk in split_text(content, limit):
        clone = copy.deepcopy(segment)
        clone["text"]["content"] = chunk
        clone["plain_text"] = chunk
        pieces.append(clone)
    return pieces


def normalize_run(
    run: list[dict[str, Any]],
    *,
    overflow: OverflowPolicy = "truncate",
    metrics: Any | None = None,
) -> list[dict[str, Any]]:
    """Return a copy of *run* that satisfies both rich_text limits.

    Every segment goes through :func:`split_segment` and the results are
    flattened in order.  If more than 100 segments remain, the *overflow*
    policy decides:

    * ``"truncate"`` -- keep the first 100 and drop the rest.  Dropped
      content is lost; a warning is logged and
      ``notionrelay.rich_text_truncated_total`` is incremented by the
      number of dropped segments.
    * ``"raise"`` -- raise :class:`NotionRelayTextOverflowError`.

    The input list is not modified.  Segments that needed no split are
    shared with the input rather than copied.
    """
    result: list[dict[str, Any]] = []
    for segment in run:
        result.extend(split_segment(segment))

    if len(result) <= RICH_TEXT_ARRAY_LIMIT:
        return result

    dropped = len(result) - RICH_TEXT_ARRAY_LIMIT
    if overflow == "raise":
        raise NotionRelayTextOverflowError(
            message=(
                f"rich_text array has {len(result)} segments after splitting; "
                f"Notion accepts at most {RICH_TEXT_ARRAY_LIMIT}"
            ),
            context={"segments": len(result), "limit": RICH_TEXT_ARRAY_LIMIT},
        )

    hook = metrics if metrics is not None else NoopMetricsHook()
    hook.increment("notionrelay.rich_text_truncated_total", value=dropped)
    log.warning(
        "Rich text truncated",
        extra={
            "extra_fields": {
                "op": "normalize_run",
                "segments": len(result),
                "dropped": dropped,
            }
        },
    )
    return result[:RICH_TEXT_ARRAY_LIMIT]


def extract_plain_text(run: list[dict[str, Any]]) -> str:
    """Concatenate the visible text of a rich_text run.

    API responses carry ``plain_text``; locally built segments only have
    ``text.content``.
    """
    parts: list[str] = []
    for segment in run:
        text = segment.get("plain_text")
        if text is None:
            text = (segment.get("text") or {}).get("content", "")
        parts.append(text)
    return "".join(parts)
