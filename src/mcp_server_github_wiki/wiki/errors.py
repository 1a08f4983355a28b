"""Typed exception hierarchy for wiki operations.

Every exception carries a ``category`` string that the tool boundary copies
into the failure result, so callers can tell "page not found" apart from
"authentication failed" without parsing messages.
"""


class WikiError(Exception):
    """Base class for wiki operation failures."""

    category = "internal"

    def __init__(self, message: str, page: str | None = None):
        super().__init__(message)
        self.message = message
        self.page = page


class WikiCloneError(WikiError):
    """Raised when the wiki repository cannot be cloned.

    Covers a missing repository, a wiki that was never initialized on the
    remote, rejected credentials and network failures.
    """

    category = "acquisition"


class PageNotFoundError(WikiError):
    """Raised by read and delete when the page file is absent."""

    category = "not_found"

    def __init__(self, page: str):
        super().__init__(f"Page {page} does not exist", page=page)


class WikiLocalIOError(WikiError):
    """Raised when reading, writing or listing files in the working copy fails."""

    category = "local_io"


class WikiPushError(WikiError):
    """Raised when staging, committing or pushing a change fails.

    A push rejected because another writer updated the wiki first lands
    here too; the caller has to run the operation again.
    """

    category = "remote_mutation"
