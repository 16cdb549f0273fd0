"""User API wrappers for the Notion API (``/users``)."""

from __future__ import annotations

from typing import Any

from .blocks import page_params
from .transport import AsyncNotionTransport, NotionTransport


class UserAPI:
    """Synchronous wrapper for the Notion Users API."""

    def __init__(self, transport: NotionTransport) -> None:
        self._transport = transport

    def list(self, start_cursor: str | None = None, page_size: int | None = None) -> dict[str, Any]:
        """List one page of workspace users (people and bots)."""
        return self._transport.request("GET", "/users", params=page_params(start_cursor, page_size))

    def retrieve(self, user_id: str) -> dict[str, Any]:
        """Retrieve a user by ID."""
        return self._transport.request("GET", f"/users/{user_id}")

    def me(self) -> dict[str, Any]:
        """Retrieve the bot user tied to the integration token."""
        return self._transport.request("GET", "/users/me")


class AsyncUserAPI:
    """Asynchronous wrapper for the Notion Users API."""

    def __init__(self, transport: AsyncNotionTransport) -> None:
        self._transport = transport

    async def list(self, start_cursor: str | None = None, page_size: int | None = None) -> dict[str, Any]:
        return await self._transport.request("GET", "/users", params=page_params(start_cursor, page_size))

    async def retrieve(self, user_id: str) -> dict[str, Any]:
        return await self._transport.request("GET", f"/users/{user_id}")

    async def me(self) -> dict[str, Any]:
        return await self._transport.request("GET", "/users/me")
