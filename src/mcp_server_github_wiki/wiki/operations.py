"""Wiki page operations for MCP GitHub Wiki Server.

Each operation clones the wiki into a private temporary working copy, acts on
the page file at the root of that clone and, for mutating operations, commits
and pushes the change before the working copy is discarded. There is no
retry: a push rejected because someone else updated the wiki first is
reported as a failure and the caller runs the operation again.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from git import GitCommandError

from ..config import WikiServerSettings
from .errors import PageNotFoundError, WikiLocalIOError, WikiPushError
from .models import WikiConfig, WikiPageInfo
from .naming import (
    PAGE_EXTENSION,
    normalize_page_name,
    page_title_from_file,
    redact_token,
    wiki_page_url,
)
from .workspace import WikiWorkingCopy, clone_wiki

logger = logging.getLogger(__name__)

APPEND_SEPARATOR = "\n\n"


def _read_file(path: Path) -> str:
    # newline="" keeps line endings exactly as stored
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def _write_file(path: Path, content: str) -> None:
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(content)


def _read_page(copy: WikiWorkingCopy, file_name: str) -> str:
    try:
        return _read_file(copy.page_path(file_name))
    except (OSError, UnicodeDecodeError) as e:
        raise WikiLocalIOError(f"Failed to read {file_name}: {e}", page=file_name) from e


def _write_page(copy: WikiWorkingCopy, file_name: str, content: str) -> None:
    try:
        _write_file(copy.page_path(file_name), content)
    except OSError as e:
        raise WikiLocalIOError(f"Failed to write {file_name}: {e}", page=file_name) from e


def _require_page(copy: WikiWorkingCopy, file_name: str) -> Path:
    path = copy.page_path(file_name)
    if not path.is_file():
        raise PageNotFoundError(file_name)
    return path


def _commit_and_push(
    copy: WikiWorkingCopy,
    config: WikiConfig,
    settings: WikiServerSettings,
    file_name: str,
    message: str,
) -> str:
    """Stage one page, commit it and push to the wiki branch.

    Returns:
        Short hash of the new commit
    """
    repo = copy.repo
    try:
        # --all stages deletions as well as new and modified files
        repo.git.add("--all", "--", file_name)
        commit = repo.index.commit(message)
    except (GitCommandError, OSError) as e:
        raise WikiPushError(
            f"Failed to commit {file_name}: {redact_token(str(e), config.token)}",
            page=file_name,
        ) from None

    try:
        repo.git.push(settings.remote, f"HEAD:refs/heads/{settings.branch}")
    except GitCommandError as e:
        detail = (e.stderr or "").strip() or str(e)
        raise WikiPushError(
            f"Failed to push {file_name}: {redact_token(detail, config.token)}",
            page=file_name,
        ) from None

    short_sha = commit.hexsha[:8]
    logger.info(f"Pushed {file_name} to {config.owner}/{config.repo} wiki ({short_sha})")
    return short_sha


def page_sort_key(name: str) -> tuple[str, str]:
    """Collation key for page names.

    Case-insensitive first; between names that differ only in case the
    lowercase form sorts first ("a" < "A" < "b"). Punctuation compares by
    code point, so "-" sorts before "_" ("a-b" < "a_b"), unlike ICU locale
    collation which puts "a_b" first.
    """
    return (name.casefold(), name.swapcase())


def write_wiki_page(
    config: WikiConfig,
    page_name: str,
    content: str,
    commit_message: Optional[str] = None,
    settings: Optional[WikiServerSettings] = None,
) -> Dict[str, Any]:
    """Write or update a wiki page, creating it if needed"""
    settings = settings or WikiServerSettings()
    file_name = normalize_page_name(page_name)

    with clone_wiki(config, settings) as copy:
        _write_page(copy, file_name, content)
        commit = _commit_and_push(
            copy, config, settings, file_name, commit_message or f"Update {file_name}"
        )

    return {
        "page": file_name,
        "url": wiki_page_url(config.owner, config.repo, file_name, settings.host),
        "commit": commit,
    }


def read_wiki_page(
    config: WikiConfig,
    page_name: str,
    settings: Optional[WikiServerSettings] = None,
) -> Dict[str, Any]:
    """Read the content of an existing wiki page"""
    settings = settings or WikiServerSettings()
    file_name = normalize_page_name(page_name)

    with clone_wiki(config, settings) as copy:
        _require_page(copy, file_name)
        content = _read_page(copy, file_name)

    return {"page": file_name, "content": content}


def append_to_wiki_page(
    config: WikiConfig,
    page_name: str,
    content: str,
    commit_message: Optional[str] = None,
    settings: Optional[WikiServerSettings] = None,
) -> Dict[str, Any]:
    """Append content to a wiki page, creating the page if it does not exist.

    Existing content and the new content are separated by a blank line. A
    missing or empty page gets the new content without a separator.
    """
    settings = settings or WikiServerSettings()
    file_name = normalize_page_name(page_name)

    with clone_wiki(config, settings) as copy:
        existing = ""
        if copy.page_path(file_name).is_file():
            existing = _read_page(copy, file_name)

        new_content = f"{existing}{APPEND_SEPARATOR}{content}" if existing else content
        _write_page(copy, file_name, new_content)
        commit = _commit_and_push(
            copy, config, settings, file_name, commit_message or f"Append to {file_name}"
        )

    return {"page": file_name, "commit": commit}


def list_wiki_pages(
    config: WikiConfig,
    settings: Optional[WikiServerSettings] = None,
) -> Dict[str, Any]:
    """List the pages at the root of the wiki, sorted by name"""
    settings = settings or WikiServerSettings()

    with clone_wiki(config, settings) as copy:
        pages: List[WikiPageInfo] = []
        try:
            for entry in copy.path.iterdir():
                if not entry.name.endswith(PAGE_EXTENSION) or not entry.is_file():
                    continue
                pages.append(
                    WikiPageInfo(
                        name=page_title_from_file(entry.name),
                        path=entry.name,
                        size=entry.stat().st_size,
                    )
                )
        except OSError as e:
            raise WikiLocalIOError(f"Failed to list wiki pages: {e}") from e

    pages.sort(key=lambda page: page_sort_key(page.name))
    return {"pages": [page.model_dump() for page in pages], "count": len(pages)}


def delete_wiki_page(
    config: WikiConfig,
    page_name: str,
    commit_message: Optional[str] = None,
    settings: Optional[WikiServerSettings] = None,
) -> Dict[str, Any]:
    """Delete an existing wiki page"""
    settings = settings or WikiServerSettings()
    file_name = normalize_page_name(page_name)

    with clone_wiki(config, settings) as copy:
        path = _require_page(copy, file_name)
        try:
            path.unlink()
        except OSError as e:
            raise WikiLocalIOError(f"Failed to delete {file_name}: {e}", page=file_name) from e
        commit = _commit_and_push(
            copy,
            config,
            settings,
            file_name,
            commit_message or f"Delete {file_name}",
        )

    return {"page": file_name, "commit": commit}
