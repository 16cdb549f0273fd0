from .redact import redact
from .text_split import RICH_TEXT_CHAR_LIMIT, split_text, utf16_len

__all__ = [
    "RICH_TEXT_CHAR_LIMIT",
    "redact",
    "split_text",
    "utf16_len",
]
