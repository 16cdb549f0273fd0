"""notionrelay.notion_api -- Notion API transport and endpoint wrappers.

* :mod:`.rate_limit` -- token-bucket pacing (sync and async).
* :mod:`.retries` -- retry decisions and exponential backoff.
* :mod:`.transport` -- HTTP transport with auth, retries and pacing.
* :mod:`.blocks`, :mod:`.pages`, :mod:`.databases`, :mod:`.users`,
  :mod:`.comments`, :mod:`.search` -- endpoint wrappers.
"""

from __future__ import annotations

from .blocks import AsyncBlockAPI, BlockAPI
from .comments import AsyncCommentAPI, CommentAPI
from .databases import AsyncDatabaseAPI, DatabaseAPI
from .pages import AsyncPageAPI, PageAPI
from .rate_limit import AsyncTokenBucket, TokenBucket
from .retries import compute_backoff, should_retry
from .search import AsyncSearchAPI, SearchAPI
from .transport import AsyncNotionTransport, NotionTransport
from .users import AsyncUserAPI, UserAPI

__all__ = [
    "AsyncBlockAPI",
    "AsyncCommentAPI",
    "AsyncDatabaseAPI",
    "AsyncNotionTransport",
    "AsyncPageAPI",
    "AsyncSearchAPI",
    "AsyncTokenBucket",
    "AsyncUserAPI",
    "BlockAPI",
    "CommentAPI",
    "DatabaseAPI",
    "NotionTransport",
    "PageAPI",
    "SearchAPI",
    "TokenBucket",
    "UserAPI",
    "compute_backoff",
    "should_retry",
]
