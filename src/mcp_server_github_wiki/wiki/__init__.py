"""Wiki page operations backed by a temporary clone of the wiki repository"""

from .errors import (
    PageNotFoundError,
    WikiCloneError,
    WikiError,
    WikiLocalIOError,
    WikiPushError,
)
from .models import OperationResult, WikiConfig, WikiPageInfo
from .naming import normalize_page_name, wiki_clone_url, wiki_page_url
from .operations import (
    append_to_wiki_page,
    delete_wiki_page,
    list_wiki_pages,
    read_wiki_page,
    write_wiki_page,
)

__all__ = [
    "OperationResult",
    "PageNotFoundError",
    "WikiCloneError",
    "WikiConfig",
    "WikiError",
    "WikiLocalIOError",
    "WikiPageInfo",
    "WikiPushError",
    "append_to_wiki_page",
    "delete_wiki_page",
    "list_wiki_pages",
    "normalize_page_name",
    "read_wiki_page",
    "wiki_clone_url",
    "wiki_page_url",
    "write_wiki_page",
]
