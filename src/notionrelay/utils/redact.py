"""Payload redaction for debug dumps.

:func:`redact` runs over every request/response pair before the transport
prints it:

* Values under credential-like keys (``Authorization``, ``access_token``,
  ``password``...) are masked.
* The integration token is scrubbed from every string in the tree.
* Long strings, typically ``text.content`` near the 2 000-unit limit, are
  collapsed to ``<text:N_chars>`` so dumps stay readable.
"""

from __future__ import annotations

import re
from typing import Any

# A key is sensitive when its lower-cased name contains any of these.
_SENSITIVE_KEY_PARTS: tuple[str, ...] = (
    "authorization",
    "token",
    "secret",
    "password",
    "credential",
    "cookie",
    "api_key",
    "api-key",
)

_LONG_TEXT_THRESHOLD = 200

_BEARER_RE = re.compile(r"(Bearer\s+)\S+")


def _is_sensitive(key: Any) -> bool:
    return isinstance(key, str) and any(part in key.lower() for part in _SENSITIVE_KEY_PARTS)


def _scrub(text: str, token: str | None) -> str:
    """Replace *token* (keeping its last four characters) and bearer values."""
    if token and token in text:
        hint = f"<redacted:...{token[-4:]}>" if len(token) > 8 else "<redacted>"
        text = text.replace(token, hint)
    return _BEARER_RE.sub(r"\1<redacted>", text)


def _walk(value: Any, token: str | None) -> Any:
    if isinstance(value, dict):
        out: dict = {}
        for key, item in value.items():
            if not _is_sensitive(key):
                out[key] = _walk(item, token)
                continue
            scrubbed = _scrub(item, token) if isinstance(item, str) else None
            out[key] = scrubbed if scrubbed not in (None, item) else "<redacted>"
        return out
    if isinstance(value, (list, tuple)):
        return [_walk(item, token) for item in value]
    if isinstance(value, str):
        value = _scrub(value, token)
        return f"<text:{len(value)}_chars>" if len(value) > _LONG_TEXT_THRESHOLD else value
    if isinstance(value, (bytes, bytearray)):
        return f"<binary:{len(value)}_bytes>"
    return value


def redact(payload: dict, token: str | None = None) -> dict:
    """Return a redacted copy of *payload*; the input is never mutated.

    >>> redact({"Authorization": "Bearer secret_abc123"})
    {'Authorization': 'Bearer <redacted>'}
    >>> redact({"note": "uses secret_abcdefgh1234"}, token="secret_abcdefgh1234")
    {'note': 'uses <redacted:...1234>'}
    """
    return _walk(payload, token)
