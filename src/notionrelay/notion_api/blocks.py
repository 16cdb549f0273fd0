"""Block API wrappers for the Notion API.

:class:`BlockAPI` (sync) and :class:`AsyncBlockAPI` (async) are thin
wrappers around ``/blocks``.  They send payloads as given; rich_text
normalization happens in the client facade before these are called.
"""

from __future__ import annotations

from typing import Any

from .transport import AsyncNotionTransport, NotionTransport


def page_params(start_cursor: str | None, page_size: int | None) -> dict[str, Any]:
    """Build pagination query/body parameters, omitting unset values."""
    params: dict[str, Any] = {}
    if start_cursor:
        params["start_cursor"] = start_cursor
    if page_size:
        params["page_size"] = page_size
    return params


def _append_body(children: list[dict[str, Any]], after: str | None) -> dict[str, Any]:
    body: dict[str, Any] = {"children": children}
    if after is not None:
        body["after"] = after
    return body


class BlockAPI:
    """Synchronous wrapper for the Notion Blocks API.

    Parameters
    ----------
    transport:
        A configured :class:`NotionTransport` instance.
    """

    def __init__(self, transport: NotionTransport) -> None:
        self._transport = transport

    def retrieve(self, block_id: str) -> dict[str, Any]:
        """Retrieve a single block object."""
        return self._transport.request("GET", f"/blocks/{block_id}")

    def list_children(
        self,
        block_id: str,
        start_cursor: str | None = None,
        page_size: int | None = None,
    ) -> dict[str, Any]:
        """Retrieve one page of a block's children.

        Returns
        -------
        dict
            A Notion ``list`` object with ``results``, ``has_more`` and
            ``next_cursor``.
        """
        return self._transport.request(
            "GET",
            f"/blocks/{block_id}/children",
            params=page_params(start_cursor, page_size),
        )

    def get_children(self, block_id: str) -> list[dict[str, Any]]:
        """Retrieve every child of a block, following cursors."""
        return list(self._transport.paginate(f"/blocks/{block_id}/children", method="GET"))

    def append_children(
        self,
        block_id: str,
        children: list[dict[str, Any]],
        after: str | None = None,
    ) -> dict[str, Any]:
        """Append child blocks to a block or page.

        Parameters
        ----------
        block_id:
            Parent block or page ID.
        children:
            Block objects to append.  Notion accepts at most 100 per call.
        after:
            Insert after this existing child instead of at the end.
        """
        return self._transport.request(
            "PATCH", f"/blocks/{block_id}/children", json=_append_body(children, after),
        )

    def update(self, block_id: str, payload: dict[str, Any]) -> dict[str, Any]:
        """Update a block.  *payload* is typically ``{type: {...}}``."""
        return self._transport.request("PATCH", f"/blocks/{block_id}", json=payload)

    def delete(self, block_id: str) -> dict[str, Any]:
        """Archive a block."""
        return self._transport.request("DELETE", f"/blocks/{block_id}")


class AsyncBlockAPI:
    """Asynchronous wrapper for the Notion Blocks API.

    Mirrors :class:`BlockAPI`; every method is a coroutine.
    """

    def __init__(self, transport: AsyncNotionTransport) -> None:
        self._transport = transport

    async def retrieve(self, block_id: str) -> dict[str, Any]:
        return await self._transport.request("GET", f"/blocks/{block_id}")

    async def list_children(
        self,
        block_id: str,
        start_cursor: str | None = None,
        page_size: int | None = None,
    ) -> dict[str, Any]:
        return await self._transport.request(
            "GET",
            f"/blocks/{block_id}/children",
            params=page_params(start_cursor, page_size),
        )

    async def get_children(self, block_id: str) -> list[dict[str, Any]]:
        return [
            item
            async for item in self._transport.paginate(
                f"/blocks/{block_id}/children", method="GET",
            )
        ]

    async def append_children(
        self,
        block_id: str,
        children: list[dict[str, Any]],
        after: str | None = None,
    ) -> dict[str, Any]:
        return await self._transport.request(
            "PATCH", f"/blocks/{block_id}/children", json=_append_body(children, after),
        )

    async def update(self, block_id: str, payload: dict[str, Any]) -> dict[str, Any]:
        return await self._transport.request("PATCH", f"/blocks/{block_id}", json=payload)

    async def delete(self, block_id: str) -> dict[str, Any]:
        return await self._transport.request("DELETE", f"/blocks/{block_id}")
