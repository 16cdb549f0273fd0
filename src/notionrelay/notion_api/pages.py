"""Page API wrappers for the Notion API.

Provides :class:`PageAPI` (sync) and :class:`AsyncPageAPI` (async) over the
``/pages`` endpoints.  Database rows are pages whose parent is a database,
so :meth:`PageAPI.create` also backs ``create_database_item``.
"""

from __future__ import annotations

from typing import Any

from .transport import AsyncNotionTransport, NotionTransport


def _create_body(
    parent: dict[str, Any],
    properties: dict[str, Any],
    children: list[dict[str, Any]] | None,
) -> dict[str, Any]:
    body: dict[str, Any] = {"parent": parent, "properties": properties}
    if children is not None:
        body["children"] = children
    return body


def _update_body(properties: dict[str, Any] | None, archived: bool | None) -> dict[str, Any]:
    body: dict[str, Any] = {}
    if properties is not None:
        body["properties"] = properties
    if archived is not None:
        body["archived"] = archived
    return body


class PageAPI:
    """Synchronous wrapper for the Notion Pages API.

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
        children: list[dict[str, Any]] | None = None,
    ) -> dict[str, Any]:
        """Create a page.

        Parameters
        ----------
        parent:
            ``{"page_id": ...}`` or ``{"database_id": ...}``.
        properties:
            Property values.  Under a database these must match its
            schema; under a page only ``title`` is allowed.
        children:
            Optional initial content blocks.
        """
        return self._transport.request(
            "POST", "/pages", json=_create_body(parent, properties, children),
        )

    def retrieve(self, page_id: str) -> dict[str, Any]:
        """Retrieve a page object (properties only, not content)."""
        return self._transport.request("GET", f"/pages/{page_id}")

    def update(
        self,
        page_id: str,
        properties: dict[str, Any] | None = None,
        archived: bool | None = None,
    ) -> dict[str, Any]:
        """Update page properties and/or archive status.

        Omitted properties are left untouched.
        """
        return self._transport.request(
            "PATCH", f"/pages/{page_id}", json=_update_body(properties, archived),
        )


class AsyncPageAPI:
    """Asynchronous wrapper for the Notion Pages API.

    Mirrors :class:`PageAPI` but all methods are coroutines.
    """

    def __init__(self, transport: AsyncNotionTransport) -> None:
        self._transport = transport

    async def create(
        self,
        parent: dict[str, Any],
        properties: dict[str, Any],
        children: list[dict[str, Any]] | None = None,
    ) -> dict[str, Any]:
        return await self._transport.request(
            "POST", "/pages", json=_create_body(parent, properties, children),
        )

    async def retrieve(self, page_id: str) -> dict[str, Any]:
        return await self._transport.request("GET", f"/pages/{page_id}")

    async def update(
        self,
        page_id: str,
        properties: dict[str, Any] | None = None,
        archived: bool | None = None,
    ) -> dict[str, Any]:
        return await self._transport.request(
            "PATCH", f"/pages/{page_id}", json=_update_body(properties, archived),
        )
