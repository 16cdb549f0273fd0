"""Error hierarchy for notionrelay.

Every public error class inherits from :class:`NotionRelayError` and carries
a machine-readable ``code`` (from :class:`ErrorCode`), a human-readable
``message``, an optional structured ``context`` dict, and an optional
``cause``.

API errors map onto Notion HTTP statuses.  Errors raised before anything
is sent are :class:`NotionRelayTextOverflowError` (only under the
``"raise"`` overflow policy) and :class:`NotionRelayValidationError` for a
comment with no target.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Machine-readable error codes for every error the client can raise."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    AUTH_ERROR = "AUTH_ERROR"
    PERMISSION_ERROR = "PERMISSION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    RETRY_EXHAUSTED = "RETRY_EXHAUSTED"
    NETWORK_ERROR = "NETWORK_ERROR"
    TEXT_OVERFLOW = "TEXT_OVERFLOW"
    UNSUPPORTED_BLOCK = "UNSUPPORTED_BLOCK"


# ---------------------------------------------------------------------------
# Base error
# ---------------------------------------------------------------------------

class NotionRelayError(Exception):
    """Root of the notionrelay error tree.

    ``code`` is an :class:`ErrorCode` member, ``message`` reads well in a
    traceback, ``context`` carries structured details (status code, path,
    segment counts) and ``cause`` is the wrapped exception, also exposed
    as ``__cause__``.
    """

    def __init__(
        self,
        code: str,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.context: dict[str, Any] = dict(context) if context else {}
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        fields = [f"code={self.code!r}", f"message={self.message!r}"]
        if self.context:
            fields.append(f"context={self.context!r}")
        return f"{type(self).__name__}({', '.join(fields)})"


class _CodedError(NotionRelayError):
    """Subclass helper: the code is fixed by the class, not the caller."""

    default_code: str = ErrorCode.VALIDATION_ERROR

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=self.default_code,
            message=message,
            context=context,
            cause=cause,
        )


# ---------------------------------------------------------------------------
# API / transport errors
# ---------------------------------------------------------------------------

class NotionRelayValidationError(_CodedError):
    """Notion returned 400 (or another non-retryable 4xx), or a request was
    rejected locally before being sent.

    Context keys: ``status_code``, ``notion_code``, ``body``.
    """

    default_code = ErrorCode.VALIDATION_ERROR


class NotionRelayAuthError(_CodedError):
    """Notion returned 401: the integration token is invalid or revoked."""

    default_code = ErrorCode.AUTH_ERROR


class NotionRelayPermissionError(_CodedError):
    """Notion returned 403: the integration lacks access to the resource.

    Context keys: ``operation``.
    """

    default_code = ErrorCode.PERMISSION_ERROR


class NotionRelayNotFoundError(_CodedError):
    """Notion returned 404, or the object is not shared with the integration.

    Context keys: ``path``.
    """

    default_code = ErrorCode.NOT_FOUND


class NotionRelayConflictError(_CodedError):
    """Notion returned 409: a concurrent edit conflicted with this request."""

    default_code = ErrorCode.CONFLICT


class NotionRelayRetryExhaustedError(_CodedError):
    """All retry attempts have been exhausted for a retryable request.

    Context keys: ``attempts``, ``last_status_code``.
    """

    default_code = ErrorCode.RETRY_EXHAUSTED


class NotionRelayNetworkError(_CodedError):
    """A transport-level failure occurred (timeout, DNS, connection reset).

    Context keys: ``url``, ``attempt``.
    """

    default_code = ErrorCode.NETWORK_ERROR


# ---------------------------------------------------------------------------
# Payload / rendering errors
# ---------------------------------------------------------------------------

class NotionRelayTextOverflowError(_CodedError):
    """A rich-text array still exceeds the element limit after splitting and
    the overflow policy is ``"raise"``.

    Context keys: ``segments``, ``limit``.
    """

    default_code = ErrorCode.TEXT_OVERFLOW


class NotionRelayUnsupportedBlockError(_CodedError):
    """A block type has no Markdown rendering and the configured policy is
    ``"raise"``.

    Context keys: ``block_id``, ``block_type``.
    """

    default_code = ErrorCode.UNSUPPORTED_BLOCK
