"""Asynchronous Notion client.

:class:`AsyncNotionRelayClient` mirrors :class:`NotionRelayClient`; every
I/O method is a coroutine.  Normalization is CPU-only and runs inline
before the request is awaited.

Usage::

    import asyncio
    from notionrelay import AsyncNotionRelayClient

    async def main():
        async with AsyncNotionRelayClient(token="secret_xxx") as client:
            await client.update_block(block_id, {
                "type": "quote",
                "quote": {"rich_text": [{"type": "text", "text": {"content": text}}]},
            })

    asyncio.run(main())
"""

from __future__ import annotations

from typing import Any

from notionrelay.config import NotionRelayConfig
from notionrelay.converter.block_normalizer import normalize_block, normalize_blocks
from notionrelay.converter.notion_to_md import NotionToMarkdownRenderer
from notionrelay.converter.rich_text import normalize_run
from notionrelay.notion_api.blocks import AsyncBlockAPI
from notionrelay.notion_api.comments import AsyncCommentAPI
from notionrelay.notion_api.databases import AsyncDatabaseAPI
from notionrelay.notion_api.pages import AsyncPageAPI
from notionrelay.notion_api.search import AsyncSearchAPI
from notionrelay.notion_api.transport import AsyncNotionTransport
from notionrelay.notion_api.users import AsyncUserAPI
from notionrelay.observability import get_logger

log = get_logger("notionrelay.client")


class AsyncNotionRelayClient:
    """Asynchronous Notion API client.

    Parameters
    ----------
    token:
        Notion integration token.  **Required.**
    **kwargs:
        Forwarded to :class:`NotionRelayConfig`.
    """

    def __init__(self, token: str, **kwargs: Any) -> None:
        self._config = NotionRelayConfig(token=token, **kwargs)
        self._transport = AsyncNotionTransport(self._config)
        self._blocks = AsyncBlockAPI(self._transport)
        self._pages = AsyncPageAPI(self._transport)
        self._databases = AsyncDatabaseAPI(self._transport)
        self._users = AsyncUserAPI(self._transport)
        self._comments = AsyncCommentAPI(self._transport)
        self._search = AsyncSearchAPI(self._transport)
        self._renderer = NotionToMarkdownRenderer(self._config)

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    async def append_block_children(
        self,
        block_id: str,
        children: list[dict[str, Any]],
        after: str | None = None,
    ) -> dict[str, Any]:
        """Normalize *children* and append them (async).

        See :meth:`NotionRelayClient.append_block_children`.
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
                    "async": True,
                }
            },
        )
        return await self._blocks.append_children(block_id, normalized, after=after)

    async def retrieve_block(self, block_id: str) -> dict[str, Any]:
        return await self._blocks.retrieve(block_id)

    async def retrieve_block_children(
        self,
        block_id: str,
        start_cursor: str | None = None,
        page_size: int | None = None,
    ) -> dict[str, Any]:
        return await self._blocks.list_children(
            block_id, start_cursor=start_cursor, page_size=page_size,
        )

    async def retrieve_all_block_children(self, block_id: str) -> list[dict[str, Any]]:
        return await self._blocks.get_children(block_id)

    async def delete_block(self, block_id: str) -> dict[str, Any]:
        return await self._blocks.delete(block_id)

    async def update_block(self, block_id: str, block: dict[str, Any]) -> dict[str, Any]:
        """Normalize *block* and update it (async).

        See :meth:`NotionRelayClient.update_block`.
        """
        normalized = normalize_block(
            block,
            overflow=self._config.rich_text_overflow,
            metrics=self._config.metrics,
        )
        return await self._blocks.update(block_id, normalized)

    # ------------------------------------------------------------------
    # Pages
    # ------------------------------------------------------------------

    async def retrieve_page(self, page_id: str) -> dict[str, Any]:
        return await self._pages.retrieve(page_id)

    async def update_page_properties(self, page_id: str, properties: dict[str, Any]) -> dict[str, Any]:
        return await self._pages.update(page_id, properties=properties)

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    async def list_all_users(
        self,
        start_cursor: str | None = None,
        page_size: int | None = None,
    ) -> dict[str, Any]:
        return await self._users.list(start_cursor=start_cursor, page_size=page_size)

    async def retrieve_user(self, user_id: str) -> dict[str, Any]:
        return await self._users.retrieve(user_id)

    async def retrieve_bot_user(self) -> dict[str, Any]:
        return await self._users.me()

    # ------------------------------------------------------------------
    # Databases
    # ------------------------------------------------------------------

    async def create_database(
        self,
        parent: dict[str, Any],
        properties: dict[str, Any],
        title: list[dict[str, Any]] | None = None,
    ) -> dict[str, Any]:
        return await self._databases.create(parent, properties, title=title)

    async def query_database(
        self,
        database_id: str,
        filter: dict[str, Any] | None = None,
        sorts: list[dict[str, Any]] | None = None,
        start_cursor: str | None = None,
        page_size: int | None = None,
    ) -> dict[str, Any]:
        return await self._databases.query(
            database_id,
            filter=filter,
            sorts=sorts,
            start_cursor=start_cursor,
            page_size=page_size,
        )

    async def query_database_all(
        self,
        database_id: str,
        filter: dict[str, Any] | None = None,
        sorts: list[dict[str, Any]] | None = None,
    ) -> list[dict[str, Any]]:
        return await self._databases.query_all(database_id, filter=filter, sorts=sorts)

    async def retrieve_database(self, database_id: str) -> dict[str, Any]:
        return await self._databases.retrieve(database_id)

    async def update_database(
        self,
        database_id: str,
        title: list[dict[str, Any]] | None = None,
        description: list[dict[str, Any]] | None = None,
        properties: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        return await self._databases.update(
            database_id, title=title, description=description, properties=properties,
        )

    async def create_database_item(self, database_id: str, properties: dict[str, Any]) -> dict[str, Any]:
        return await self._pages.create({"database_id": database_id}, properties)

    # ------------------------------------------------------------------
    # Comments
    # ------------------------------------------------------------------

    async def create_comment(
        self,
        parent: dict[str, Any] | None = None,
        discussion_id: str | None = None,
        rich_text: list[dict[str, Any]] | None = None,
    ) -> dict[str, Any]:
        """Normalize *rich_text* and create the comment (async)."""
        if rich_text is not None:
            rich_text = normalize_run(
                rich_text,
                overflow=self._config.rich_text_overflow,
                metrics=self._config.metrics,
            )
        return await self._comments.create(rich_text, parent=parent, discussion_id=discussion_id)

    async def retrieve_comments(
        self,
        block_id: str,
        start_cursor: str | None = None,
        page_size: int | None = None,
    ) -> dict[str, Any]:
        return await self._comments.list(block_id, start_cursor=start_cursor, page_size=page_size)

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    async def search(
        self,
        query: str | None = None,
        filter: dict[str, Any] | None = None,
        sort: dict[str, Any] | None = None,
        start_cursor: str | None = None,
        page_size: int | None = None,
    ) -> dict[str, Any]:
        return await self._search.search(
            query=query,
            filter=filter,
            sort=sort,
            start_cursor=start_cursor,
            page_size=page_size,
        )

    # ------------------------------------------------------------------
    # Rendering & lifecycle
    # ------------------------------------------------------------------

    def to_markdown(self, response: dict[str, Any]) -> str:
        """Render a response as Markdown (synchronous, no I/O)."""
        return self._renderer.render_response(response)

    async def close(self) -> None:
        await self._transport.close()

    async def __aenter__(self) -> AsyncNotionRelayClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()
