"""Temporary wiki working copies.

Every wiki operation clones the remote wiki into a fresh temporary directory,
works on that clone and removes the directory again, whatever the outcome.
Working copies are never shared between operations.
"""

import logging
import shutil
import tempfile
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional

from git import GitCommandError, Repo

from ..config import WikiServerSettings
from .errors import WikiCloneError
from .models import WikiConfig
from .naming import redact_token, wiki_clone_url

logger = logging.getLogger(__name__)

# Fail instead of waiting on a credential prompt when the token is rejected
GIT_ENV = {"GIT_TERMINAL_PROMPT": "0"}


@dataclass
class WikiWorkingCopy:
    """A private clone of a wiki repository"""

    path: Path
    repo: Repo

    def page_path(self, file_name: str) -> Path:
        return self.path / file_name


def cleanup_working_copy(path: Path) -> bool:
    """Remove a working copy directory, logging instead of raising on failure.

    Returns:
        True when the directory is gone
    """
    try:
        shutil.rmtree(path)
    except FileNotFoundError:
        return True
    except OSError as e:
        logger.warning(f"Failed to clean up working copy {path}: {e}")
        return False
    logger.debug(f"Removed working copy {path}")
    return True


def _clone(config: WikiConfig, settings: WikiServerSettings, target: Path) -> Repo:
    url = wiki_clone_url(config.owner, config.repo, config.token, settings.host)
    try:
        repo = Repo.clone_from(url, target, env=GIT_ENV)
    except GitCommandError as e:
        detail = (e.stderr or "").strip() or str(e)
        raise WikiCloneError(
            f"Failed to clone wiki: {redact_token(detail, config.token)}"
        ) from None
    repo.git.update_environment(**GIT_ENV)
    return repo


@contextmanager
def clone_wiki(
    config: WikiConfig, settings: Optional[WikiServerSettings] = None
) -> Iterator[WikiWorkingCopy]:
    """Clone a wiki into a temporary directory for the duration of the block.

    The directory is removed when the block exits, including when the clone
    itself fails. Cleanup problems are logged and never replace the block's
    own outcome.

    Raises:
        WikiCloneError: If the wiki cannot be cloned
    """
    settings = settings or WikiServerSettings()
    tmp_dir = Path(tempfile.mkdtemp(prefix=settings.temp_prefix, dir=settings.temp_root))
    logger.debug(f"Cloning {config.owner}/{config.repo} wiki into {tmp_dir}")

    try:
        repo = _clone(config, settings, tmp_dir)
        try:
            yield WikiWorkingCopy(path=tmp_dir, repo=repo)
        finally:
            repo.close()
    finally:
        cleanup_working_copy(tmp_dir)
