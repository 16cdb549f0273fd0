"""Comment API wrappers for the Notion API (``/comments``).

A comment is created either on a page (``parent``) or as a reply in an
existing thread (``discussion_id``).  Its body is a single rich_text run.
"""

from __future__ import annotations

from typing import Any

from notionrelay.errors import NotionRelayValidationError

from .blocks import page_params
from .transport import AsyncNotionTransport, NotionTransport


def _create_body(
    rich_text: list[dict[str, Any]] | None,
    parent: dict[str, Any] | None,
    discussion_id: str | None,
) -> dict[str, Any]:
    if not parent and not discussion_id:
        raise NotionRelayValidationError(
            message="A comment needs either a parent page or a discussion_id",
            context={"field": "parent", "constraint": "parent or discussion_id required"},
        )
    body: dict[str, Any] = {}
    if rich_text is not None:
        body["rich_text"] = rich_text
    if parent:
        body["parent"] = parent
    if discussion_id:
        body["discussion_id"] = discussion_id
    return body


def _list_params(block_id: str, start_cursor: str | None, page_size: int | None) -> dict[str, Any]:
    return {"block_id": block_id, **page_params(start_cursor, page_size)}


class CommentAPI:
    """Synchronous wrapper for the Notion Comments API."""

    def __init__(self, transport: NotionTransport) -> None:
        self._transport = transport

    def create(
        self,
        rich_text: list[dict[str, Any]] | None,
        parent: dict[str, Any] | None = None,
        discussion_id: str | None = None,
    ) -> dict[str, Any]:
        """Create a comment.

        Parameters
        ----------
        rich_text:
            Comment body.
        parent:
            ``{"page_id": ...}`` to start a new thread on a page.
        discussion_id:
            Reply to an existing thread instead.

        Raises
        ------
        NotionRelayValidationError
            If neither *parent* nor *discussion_id* is given.
        """
        return self._transport.request(
            "POST", "/comments", json=_create_body(rich_text, parent, discussion_id),
        )

    def list(
        self,
        block_id: str,
        start_cursor: str | None = None,
        page_size: int | None = None,
    ) -> dict[str, Any]:
        """List one page of unresolved comments on a page or block."""
        return self._transport.request(
            "GET", "/comments", params=_list_params(block_id, start_cursor, page_size),
        )


class AsyncCommentAPI:
    """Asynchronous wrapper for the Notion Comments API."""

    def __init__(self, transport: AsyncNotionTransport) -> None:
        self._transport = transport

    async def create(
        self,
        rich_text: list[dict[str, Any]] | None,
        parent: dict[str, Any] | None = None,
        discussion_id: str | None = None,
    ) -> dict[str, Any]:
        return await self._transport.request(
            "POST", "/comments", json=_create_body(rich_text, parent, discussion_id),
        )

    async def list(
        self,
        block_id: str,
        start_cursor: str | None = None,
        page_size: int | None = None,
    ) -> dict[str, Any]:
        return await self._transport.request(
            "GET", "/comments", params=_list_params(block_id, start_cursor, page_size),
        )
