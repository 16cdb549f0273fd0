"""Tests for errors.py."""

from __future__ import annotations

import pytest

from notionrelay import errors
from notionrelay.errors import ErrorCode, NotionRelayError


@pytest.mark.parametrize(
    "cls, code",
    [
        (errors.NotionRelayValidationError, ErrorCode.VALIDATION_ERROR),
        (errors.NotionRelayAuthError, ErrorCode.AUTH_ERROR),
        (errors.NotionRelayPermissionError, ErrorCode.PERMISSION_ERROR),
        (errors.NotionRelayNotFoundError, ErrorCode.NOT_FOUND),
        (errors.NotionRelayConflictError, ErrorCode.CONFLICT),
        (errors.NotionRelayRetryExhaustedError, ErrorCode.RETRY_EXHAUSTED),
        (errors.NotionRelayNetworkError, ErrorCode.NETWORK_ERROR),
        (errors.NotionRelayTextOverflowError, ErrorCode.TEXT_OVERFLOW),
        (errors.NotionRelayUnsupportedBlockError, ErrorCode.UNSUPPORTED_BLOCK),
    ],
)
def test_subclass_codes(cls, code):
    err = cls(message="m")
    assert isinstance(err, NotionRelayError)
    assert err.code == code
    assert err.context == {}


def test_str_is_message():
    assert str(errors.NotionRelayAuthError(message="bad token")) == "bad token"


def test_cause_chained():
    cause = OSError("reset")
    err = errors.NotionRelayNetworkError(message="net", cause=cause)
    assert err.cause is cause
    assert err.__cause__ is cause


def test_repr_includes_context():
    err = errors.NotionRelayTextOverflowError(message="too many", context={"segments": 120})
    text = repr(err)
    assert text.startswith("NotionRelayTextOverflowError(")
    assert "message='too many'" in text
    assert "context={'segments': 120}" in text


def test_error_code_is_str():
    assert ErrorCode.NOT_FOUND == "NOT_FOUND"
