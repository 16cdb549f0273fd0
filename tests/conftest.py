"""Shared test fixtures for the notionrelay test suite."""

from __future__ import annotations

import pytest

from notionrelay.config import NotionRelayConfig
from notionrelay.converter.notion_to_md import NotionToMarkdownRenderer


@pytest.fixture
def config() -> NotionRelayConfig:
    """Default test configuration with a dummy token."""
    return NotionRelayConfig(token="test_token_1234")


@pytest.fixture
def renderer(config: NotionRelayConfig) -> NotionToMarkdownRenderer:
    """Notion-to-Markdown renderer using the default test config."""
    return NotionToMarkdownRenderer(config)

