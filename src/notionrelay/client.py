"""Synchronous Notion client.

:class:`NotionRelayClient` bundles a transport and the endpoint wrappers
behind one object.  Outbound block and comment payloads are normalized to
Notion's rich_text limits before they are sent:

* :meth:`~NotionRelayClient.append_block_children` -- each child block.
* :meth:`~NotionRelayClient.update_block` -- the block payload.
* :meth:`~NotionRelayClient.create_comment` -- the comment's rich_text.

Usage::

    from notionrelay import NotionRelayClient

    with NotionRelayClient(token="secret_xxx") as client:
        client.append_block_children(page_id, [
            {"type": "paragraph", "paragraph": {"rich_text": [
                {"type": "text", "text": {"content": very_long_text}},
            ]}},
        ])
"""

from __future__ import annotations

from typing import Any

from notionrelay.config import NotionRelayConfig
from notionrelay.converter.block_normalizer import normalize_block, normalize_blocks
from notionrelay.converter.notion_to_md import NotionToMarkdownRenderer
from notionrelay.converter.rich_text import normalize_run
from notionrelay.notion_api.blocks import BlockAPI
from notionrelay.notion_api.comments import CommentAPI
from notionrelay.notion_api.databases import DatabaseAPI
from notionrelay.notion_api.pages import PageAPI
from notionrelay.notion_api.search import SearchAPI
from notionrelay.notion_api.transport import NotionTransport
from notionrelay.notion_api.users import UserAPI
from notionrelay.observability import get_logger

log = get_logger("notionrelay.client")


class NotionRelayClient:
    """Synchronous Notion API client.

    Parameters
    ----------
    token:
        Notion integration token.  **Required.**
    **kwargs:
        Forwarded to :class:`NotionRelayConfig`.
    """

    def __init__(self, token: str, **kwargs: Any) -> None:
        self._config = NotionRelayConfig(token=token, **kwargs)
        self._transport = NotionTransport(self._config)
        self._blocks = BlockAPI(self._transport)
        self._pages = PageAPI(self._transport)
        self._databases = DatabaseAPI(self._transport)
        self._users = UserAPI(self._transport)
        self._comments = CommentAPI(self._transport)
        self._search = SearchAPI(self._transport)
        self._renderer = NotionToMarkdownRenderer(self._config)

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    def append_block_children(
        self,
        block_id: str,
        children: list[dict[str, Any]],
        after: str | None = None,
    ) -> dict[str, Any]:
        """Append *children* to a block or page.

        Every child is passed through
        :func:`~notionrelay.converter.block_normalizer.normalize_block`
        first, so long text is split into compliant segments.  Under the
        default ``rich_text_overflow="truncate"`` policy a run that still
        exceeds 100 segments loses its trailing segments.

        Returns
        -------
        dict
            The Notion ``list`` of appended blocks.
        """
        normalized = normalize_blocks(
            children,
            overflow=self._config.rich_text_overflow,
            metrics=self._config.metrics,
        )
        log.debug(
            "append_block_children",
            extra={
                "extra_fields": {
                    "op": "append_block_children",
                    "block_id": block_id,
                    "blocks": len(normalized),
                }
            },
        )
        return self._blocks.append_children(block_id, normalized, after=after)

    def retrieve_block(self, block_id: str) -> dict[str, Any]:
        """Retrieve a block object."""
        return self._blocks.retrieve(block_id)

    def retrieve_block_children(
        self,
        block_id: str,
        start_cursor: str | None = None,
        page_size: int | None = None,
    ) -> dict[str, Any]:
        """Retrieve one page of a block's children."""
        return self._blocks.list_children(block_id, start_cursor=start_cursor, page_size=page_size)

    def retrieve_all_block_children(self, block_id: str) -> list[dict[str, Any]]:
        """Retrieve every child of a block, following pagination cursors."""
        return self._blocks.get_children(block_id)

    def delete_block(self, block_id: str) -> dict[str, Any]:
        """Archive a block."""
        return self._blocks.delete(block_id)

    def update_block(self, block_id: str, block: dict[str, Any]) -> dict[str, Any]:
        """Update a block after normalizing its rich_text.

        Parameters
        ----------
        block_id:
            The block to update.
        block:
            Partial block, e.g.
            ``{"type": "paragraph", "paragraph": {"rich_text": [...]}}``.
        """
        normalized = normalize_block(
            block,
            overflow=self._config.rich_text_overflow,
            metrics=self._config.metrics,
        )
        return self._blocks.update(block_id, normalized)

    # ------------------------------------------------------------------
    # Pages
    # ------------------------------------------------------------------

    def retrieve_page(self, page_id: str) -> dict[str, Any]:
        """Retrieve a page object."""
        return self._pages.retrieve(page_id)

    def update_page_properties(self, page_id: str, properties: dict[str, Any]) -> dict[str, Any]:
        """Update property values of a page."""
        return self._pages.update(page_id, properties=properties)

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    def list_all_users(
        self,
        start_cursor: str | None = None,
        page_size: int | None = None,
    ) -> dict[str, Any]:
        """List one page of workspace users."""
        return self._users.list(start_cursor=start_cursor, page_size=page_size)

    def retrieve_user(self, user_id: str) -> dict[str, Any]:
        """Retrieve a user."""
        return self._users.retrieve(user_id)

    def retrieve_bot_user(self) -> dict[str, Any]:
        """Retrieve the bot user of the current token."""
        return self._users.me()

    # ------------------------------------------------------------------
    # Databases
    # ------------------------------------------------------------------

    def create_database(
        self,
        parent: dict[str, Any],
        properties: dict[str, Any],
        title: list[dict[str, Any]] | None = None,
    ) -> dict[str, Any]:
        """Create a database under *parent*."""
        return self._databases.create(parent, properties, title=title)

    def query_database(
        self,
        database_id: str,
        filter: dict[str, Any] | None = None,
        sorts: list[dict[str, Any]] | None = None,
        start_cursor: str | None = None,
        page_size: int | None = None,
    ) -> dict[str, Any]:
        """Query one page of rows from a database.

        *sorts* entries look like
        ``{"property": "Due", "direction": "ascending"}`` or
        ``{"timestamp": "created_time", "direction": "descending"}``.
        """
        return self._databases.query(
            database_id,
            filter=filter,
            sorts=sorts,
            start_cursor=start_cursor,
            page_size=page_size,
        )

    def query_database_all(
        self,
        database_id: str,
        filter: dict[str, Any] | None = None,
        sorts: list[dict[str, Any]] | None = None,
    ) -> list[dict[str, Any]]:
        """Return every matching row, following pagination cursors."""
        return self._databases.query_all(database_id, filter=filter, sorts=sorts)

    def retrieve_database(self, database_id: str) -> dict[str, Any]:
        """Retrieve a database object."""
        return self._databases.retrieve(database_id)

    def update_database(
        self,
        database_id: str,
        title: list[dict[str, Any]] | None = None,
        description: list[dict[str, Any]] | None = None,
        properties: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Update a database's title, description or schema."""
        return self._databases.update(
            database_id, title=title, description=description, properties=properties,
        )

    def create_database_item(self, database_id: str, properties: dict[str, Any]) -> dict[str, Any]:
        """Create a row (page) in a database."""
        return self._pages.create({"database_id": database_id}, properties)

    # ------------------------------------------------------------------
    # Comments
    # ------------------------------------------------------------------

    def create_comment(
        self,
        parent: dict[str, Any] | None = None,
        discussion_id: str | None = None,
        rich_text: list[dict[str, Any]] | None = None,
    ) -> dict[str, Any]:
        """Create a comment on a page or reply to a discussion.

        *rich_text*, when given, is passed through
        :func:`~notionrelay.converter.rich_text.normalize_run`.
        """
        if rich_text is not None:
            rich_text = normalize_run(
                rich_text,
                overflow=self._config.rich_text_overflow,
                metrics=self._config.metrics,
            )
        return self._comments.create(rich_text, parent=parent, discussion_id=discussion_id)

    def retrieve_comments(
        self,
        block_id: str,
        start_cursor: str | None = None,
        page_size: int | None = None,
    ) -> dict[str, Any]:
        """List one page of comments on a page or block."""
        return self._comments.list(block_id, start_cursor=start_cursor, page_size=page_size)

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def search(
        self,
        query: str | None = None,
        filter: dict[str, Any] | None = None,
        sort: dict[str, Any] | None = None,
        start_cursor: str | None = None,
        page_size: int | None = None,
    ) -> dict[str, Any]:
        """Search pages and databases by title."""
        return self._search.search(
            query=query,
            filter=filter,
            sort=sort,
            start_cursor=start_cursor,
            page_size=page_size,
        )

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def to_markdown(self, response: dict[str, Any]) -> str:
        """Render a response returned by this client as Markdown."""
        return self._renderer.render_response(response)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        self._transport.close()

    def __enter__(self) -> NotionRelayClient:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
