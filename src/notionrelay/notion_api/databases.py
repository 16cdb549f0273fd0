"""Database API wrappers for the Notion API.

:class:`DatabaseAPI` and :class:`AsyncDatabaseAPI` cover ``/databases``:
create, retrieve, update and query.  Optional fields are left out of the
request body entirely when not supplied, because Notion treats an explicit
``null`` differently from an absent key.
"""

from __future__ import annotations

from typing import Any

from .blocks import page_params
from .transport import AsyncNotionTransport, NotionTransport


def _create_body(
    parent: dict[str, Any],
    properties: dict[str, Any],
    title: list[dict[str, Any]] | None,
) -> dict[str, Any]:
    body: dict[str, Any] = {"parent": parent, "properties": properties}
    if title is not None:
        body["title"] = title
    return body


def _update_body(
    title: list[dict[str, Any]] | None,
    description: list[dict[str, Any]] | None,
    properties: dict[str, Any] | None,
) -> dict[str, Any]:
    body: dict[str, Any] = {}
    if title:
        body["title"] = title
    if description:
        body["description"] = description
    if properties:
        body["properties"] = properties
    return body


def _query_body(
    filter: dict[str, Any] | None,
    sorts: list[dict[str, Any]] | None,
    start_cursor: str | None,
    page_size: int | None,
) -> dict[str, Any]:
    body: dict[str, Any] = {}
    if filter:
        body["filter"] = filter
    if sorts:
        body["sorts"] = sorts
    body.update(page_params(start_cursor, page_size))
    return body


class DatabaseAPI:
    """Synchronous wrapper for the Notion Databases API.

    Parameters
    ----------
    transport:
        A configured :class:`NotionTransport` instance.
    """

    def __init__(self, transport: NotionTransport) -> None:
        self._transport = transport

    def create(
        self,
        parent: dict[str, Any],
        properties: dict[str, Any],
        title: list[dict[str, Any]] | None = None,
    ) -> dict[str, Any]:
        """Create a database as a child of a page.

        Parameters
        ----------
        parent:
            ``{"type": "page_id", "page_id": ...}``.
        properties:
            Property schema, e.g. ``{"Name": {"title": {}}}``.
        title:
            Optional rich_text title.
        """
        return self._transport.request(
            "POST", "/databases", json=_create_body(parent, properties, title),
        )

    def retrieve(self, database_id: str) -> dict[str, Any]:
        """Retrieve a database object, including its property schema."""
        return self._transport.request("GET", f"/databases/{database_id}")

    def update(
        self,
        database_id: str,
        title: list[dict[str, Any]] | None = None,
        description: list[dict[str, Any]] | None = None,
        properties: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Update a database's title, description or property schema."""
        return self._transport.request(
            "PATCH",
            f"/databases/{database_id}",
            json=_update_body(title, description, properties),
        )

    def query(
        self,
        database_id: str,
        filter: dict[str, Any] | None = None,
        sorts: list[dict[str, Any]] | None = None,
        start_cursor: str | None = None,
        page_size: int | None = None,
    ) -> dict[str, Any]:
        """Query one page of database rows.

        Returns
        -------
        dict
            A Notion ``list`` object of page results.
        """
        return self._transport.request(
            "POST",
            f"/databases/{database_id}/query",
            json=_query_body(filter, sorts, start_cursor, page_size),
        )

    def query_all(
        self,
        database_id: str,
        filter: dict[str, Any] | None = None,
        sorts: list[dict[str, Any]] | None = None,
    ) -> list[dict[str, Any]]:
        """Return every row matching *filter*, following cursors."""
        return list(
            self._transport.paginate(
                f"/databases/{database_id}/query",
                method="POST",
                json=_query_body(filter, sorts, None, None),
            )
        )


class AsyncDatabaseAPI:
    """Asynchronous wrapper for the Notion Databases API.

    Mirrors :class:`DatabaseAPI`; every method is a coroutine.
    """

    def __init__(self, transport: AsyncNotionTransport) -> None:
        self._transport = transport

    async def create(
        self,
        parent: dict[str, Any],
        properties: dict[str, Any],
        title: list[dict[str, Any]] | None = None,
    ) -> dict[str, Any]:
        return await self._transport.request(
            "POST", "/databases", json=_create_body(parent, properties, title),
        )

    async def retrieve(self, database_id: str) -> dict[str, Any]:
        return await self._transport.request("GET", f"/databases/{database_id}")

    async def update(
        self,
        database_id: str,
        title: list[dict[str, Any]] | None = None,
        description: list[dict[str, Any]] | None = None,
        properties: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        return await self._transport.request(
            "PATCH",
            f"/databases/{database_id}",
            json=_update_body(title, description, properties),
        )

    async def query(
        self,
        database_id: str,
        filter: dict[str, Any] | None = None,
        sorts: list[dict[str, Any]] | None = None,
        start_cursor: str | None = None,
        page_size: int | None = None,
    ) -> dict[str, Any]:
        return await self._transport.request(
            "POST",
            f"/databases/{database_id}/query",
            json=_query_body(filter, sorts, start_cursor, page_size),
        )

    async def query_all(
        self,
        database_id: str,
        filter: dict[str, Any] | None = None,
        sorts: list[dict[str, Any]] | None = None,
    ) -> list[dict[str, Any]]:
        return [
            item
            async for item in self._transport.paginate(
                f"/databases/{database_id}/query",
                method="POST",
                json=_query_body(filter, sorts, None, None),
            )
        ]
