"""Tests for config.py."""

from __future__ import annotations

import pytest

from notionrelay.config import NotionRelayConfig


class TestDefaults:
    def test_defaults(self):
        cfg = NotionRelayConfig(token="tok")
        assert cfg.base_url == "https://api.notion.com/v1"
        assert cfg.notion_version == "2022-06-28"
        assert cfg.rich_text_overflow == "truncate"
        assert cfg.unsupported_block_policy == "comment"
        assert cfg.retry_max_attempts == 5
        assert cfg.rate_limit_rps == 3.0
        assert cfg.metrics is None


class TestValidation:
    def test_insecure_remote_base_url_rejected(self):
        with pytest.raises(ValueError, match="insecure"):
            NotionRelayConfig(base_url="http://api.example.com/v1")

    @pytest.mark.parametrize("host", ["localhost", "127.0.0.1"])
    def test_http_localhost_allowed(self, host):
        assert NotionRelayConfig(base_url=f"http://{host}:8080/v1").base_url.startswith("http://")

    def test_bad_overflow_policy(self):
        with pytest.raises(ValueError, match="rich_text_overflow"):
            NotionRelayConfig(rich_text_overflow="drop")

    def test_bad_unsupported_policy(self):
        with pytest.raises(ValueError, match="unsupported_block_policy"):
            NotionRelayConfig(unsupported_block_policy="ignore")

    @pytest.mark.parametrize(
        "field, value",
        [
            ("retry_max_attempts", -1),
            ("retry_max_attempts", 0),
            ("retry_base_delay", -0.1),
            ("retry_max_delay", -1.0),
            ("rate_limit_rps", 0),
            ("timeout_seconds", 0),
        ],
    )
    def test_invalid_numbers(self, field, value):
        with pytest.raises(ValueError, match=field):
            NotionRelayConfig(**{field: value})


class TestRepr:
    def test_token_masked(self):
        text = repr(NotionRelayConfig(token="secret_abcdefgh1234"))
        assert "secret_abcdefgh1234" not in text
        assert "token='...1234'" in text

    def test_short_token_masked(self):
        assert "token='****'" in repr(NotionRelayConfig(token="ab"))
