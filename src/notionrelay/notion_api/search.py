"""Search API wrapper for the Notion API (``POST /search``).

Search matches page and database titles the integration can access.
``filter`` narrows by object type, e.g.
``{"property": "object", "value": "database"}``; ``sort`` orders by
``last_edited_time``.
"""

from __future__ import annotations

from typing import Any

from .blocks import page_params
from .transport import AsyncNotionTransport, NotionTransport


def _search_body(
    query: str | None,
    filter: dict[str, Any] | None,
    sort: dict[str, Any] | None,
    start_cursor: str | None,
    page_size: int | None,
) -> dict[str, Any]:
    body: dict[str, Any] = {}
    if query:
        body["query"] = query
    if filter:
        body["filter"] = filter
    if sort:
        body["sort"] = sort
    body.update(page_params(start_cursor, page_size))
    return body


class SearchAPI:
    """Synchronous wrapper for the Notion Search API."""

    def __init__(self, transport: NotionTransport) -> None:
        self._transport = transport

    def search(
        self,
        query: str | None = None,
        filter: dict[str, Any] | None = None,
        sort: dict[str, Any] | None = None,
        start_cursor: str | None = None,
        page_size: int | None = None,
    ) -> dict[str, Any]:
        """Return one page of search results as a Notion ``list`` object."""
        return self._transport.request(
            "POST", "/search", json=_search_body(query, filter, sort, start_cursor, page_size),
        )


class AsyncSearchAPI:
    """Asynchronous wrapper for the Notion Search API."""

    def __init__(self, transport: AsyncNotionTransport) -> None:
        self._transport = transport

    async def search(
        self,
        query: str | None = None,
        filter: dict[str, Any] | None = None,
        sort: dict[str, Any] | None = None,
        start_cursor: str | None = None,
        page_size: int | None = None,
    ) -> dict[str, Any]:
        return await self._transport.request(
            "POST", "/search", json=_search_body(query, filter, sort, start_cursor, page_size),
        )
