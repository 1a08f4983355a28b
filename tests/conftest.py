"""
Shared fixtures for the wiki server test suite.

The wiki "remote" is a local bare repository. Tests patch the clone URL
builder so every operation clones, commits and pushes against it without
touching the network.
"""

import os
import stat
from pathlib import Path
from typing import Dict, Optional

import git
import pytest

from mcp_server_github_wiki.config import WikiServerSettings
from mcp_server_github_wiki.error_handling import reset_error_stats
from mcp_server_github_wiki.wiki.models import WikiConfig

TEST_TOKEN = "ghp_testtoken1234567890"


class WikiRemoteFactory:
    """Factory for bare wiki repositories seeded with pages."""

    @staticmethod
    def create(path: Path, pages: Optional[Dict[str, str]] = None) -> git.Repo:
        bare = git.Repo.init(path / "remote.wiki.git", bare=True, initial_branch="master")
        if pages is None:
            return bare

        seed_path = path / "seed"
        seed = git.Repo.init(seed_path, initial_branch="master")
        for file_name, content in pages.items():
            with open(seed_path / file_name, "w", encoding="utf-8", newline="") as f:
                f.write(content)
        seed.index.add(list(pages))
        seed.index.commit("Initial wiki")
        seed.create_remote("origin", str(bare.git_dir))
        seed.git.push("origin", "master")
        seed.close()
        return bare

    @staticmethod
    def reject_pushes(bare: git.Repo) -> None:
        """Install a pre-receive hook that refuses every push"""
        hook = Path(bare.git_dir) / "hooks" / "pre-receive"
        hook.write_text("#!/bin/sh\necho 'push rejected by test hook' >&2\nexit 1\n")
        hook.chmod(hook.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


def remote_files(bare: git.Repo) -> list[str]:
    """File names at the root of the remote master branch"""
    return sorted(blob.name for blob in bare.commit("master").tree.blobs)


def remote_page(bare: git.Repo, file_name: str) -> str:
    """Exact content of a page on the remote master branch"""
    blob = bare.commit("master").tree / file_name
    return blob.data_stream.read().decode("utf-8")


@pytest.fixture(autouse=True)
def git_identity(monkeypatch):
    """Commits need an author even on machines without git config"""
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Test User")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "test@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Test User")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "test@example.com")


@pytest.fixture(autouse=True)
def clean_error_stats():
    reset_error_stats()
    yield
    reset_error_stats()


@pytest.fixture
def wiki_pages() -> Dict[str, str]:
    return {
        "Home.md": "# Welcome\n\nStart here.\n",
        "API-Documentation.md": "# API\n",
        "notes.txt": "not a page",
    }


@pytest.fixture
def wiki_remote(tmp_path: Path, wiki_pages: Dict[str, str]) -> git.Repo:
    bare = WikiRemoteFactory.create(tmp_path / "remote", wiki_pages)
    yield bare
    bare.close()


@pytest.fixture
def work_dir(tmp_path: Path) -> Path:
    """Parent directory for the temporary working copies"""
    path = tmp_path / "work"
    path.mkdir()
    return path


@pytest.fixture
def wiki_settings(work_dir: Path) -> WikiServerSettings:
    return WikiServerSettings(temp_root=work_dir)


@pytest.fixture
def wiki_config() -> WikiConfig:
    return WikiConfig(owner="octo-org", repo="handbook", token=TEST_TOKEN)


@pytest.fixture
def offline_wiki(monkeypatch, wiki_remote: git.Repo) -> git.Repo:
    """Point clone URLs at the local bare repository"""
    remote_path = str(wiki_remote.git_dir)
    monkeypatch.setattr(
        "mcp_server_github_wiki.wiki.workspace.wiki_clone_url",
        lambda owner, repo, token, host="github.com": remote_path,
    )
    return wiki_remote


@pytest.fixture
def missing_wiki(monkeypatch, tmp_path: Path) -> Path:
    """Point clone URLs at a repository that does not exist"""
    missing = tmp_path / "nowhere" / f"{TEST_TOKEN}.wiki.git"
    monkeypatch.setattr(
        "mcp_server_github_wiki.wiki.workspace.wiki_clone_url",
        lambda owner, repo, token, host="github.com": str(missing),
    )
    return missing


def leftover_dirs(work_dir: Path) -> list[str]:
    return sorted(os.listdir(work_dir))
