"""Integration tests against the live Notion API.

These tests require a real Notion API token and a page shared with the
integration.  Set NOTION_TOKEN and NOTION_TEST_PAGE_ID to run them.

Usage:
    NOTION_TOKEN=ntn_xxx NOTION_TEST_PAGE_ID=xxx pytest tests/integration/ -v
"""
import os

import pytest
import pytest_asyncio

# Skip entire module if no token is configured
pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(
        not os.environ.get("NOTION_TOKEN"),
        reason="NOTION_TOKEN not set; skipping integration tests",
    ),
]


@pytest.fixture
def token():
    return os.environ["NOTION_TOKEN"]


@pytest.fixture
def page_id():
    pid = os.environ.get("NOTION_TEST_PAGE_ID")
    if not pid:
        pytest.skip("NOTION_TEST_PAGE_ID not set")
    return pid


@pytest.fixture
def client(token):
    from notionrelay import NotionRelayClient
    with NotionRelayClient(token=token) as c:
        yield c


@pytest_asyncio.fixture
async def async_client(token):
    from notionrelay import AsyncNotionRelayClient
    async with AsyncNotionRelayClient(token=token) as c:
        yield c


def _paragraph(text):
    return {
        "object": "block",
        "type": "paragraph",
        "paragraph": {"rich_text": [{"type": "text", "text": {"content": text}}]},
    }


class TestLongText:
    """Oversized text is accepted once normalized."""

    def test_append_4500_chars(self, client, page_id):
        result = client.append_block_children(page_id, [_paragraph("x" * 4500)])
        block = result["results"][0]
        assert len(block["paragraph"]["rich_text"]) == 3
        client.delete_block(block["id"])

    def test_update_block_with_long_text(self, client, page_id):
        created = client.append_block_children(page_id, [_paragraph("short")])
        block_id = created["results"][0]["id"]
        updated = client.update_block(block_id, _paragraph("\U0001f600" * 1500))
        assert len(updated["paragraph"]["rich_text"]) == 2
        client.delete_block(block_id)


class TestRead:
    def test_children_to_markdown(self, client, page_id):
        children = client.retrieve_block_children(page_id)
        assert isinstance(client.to_markdown(children), str)

    def test_bot_user(self, client):
        assert client.retrieve_bot_user()["object"] == "user"


class TestAsyncOperations:
    @pytest.mark.asyncio
    async def test_async_append_and_delete(self, async_client, page_id):
        result = await async_client.append_block_children(page_id, [_paragraph("y" * 2001)])
        block = result["results"][0]
        assert len(block["paragraph"]["rich_text"]) == 2
        await async_client.delete_block(block["id"])


class TestErrorHandling:
    def test_unknown_block_raises_not_found(self, client):
        from notionrelay import NotionRelayNotFoundError
        with pytest.raises(NotionRelayNotFoundError):
            client.retrieve_block("00000000-0000-0000-0000-000000000000")

    def test_invalid_token_raises_auth_error(self):
        from notionrelay import NotionRelayAuthError, NotionRelayClient
        with NotionRelayClient(token="ntn_invalid_token") as c:
            with pytest.raises(NotionRelayAuthError):
                c.retrieve_bot_user()
