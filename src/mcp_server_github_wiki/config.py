"""Server configuration and environment loading"""

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class WikiServerSettings(BaseModel):
    """Settings shared by every wiki operation.

    Credentials are not part of the settings: each tool call brings its own
    token.
    """

    host: str = Field(default="github.com", min_length=1)
    branch: str = Field(default="master", min_length=1)
    remote: str = "origin"
    temp_prefix: str = "wiki-"
    # None uses the platform temporary directory
    temp_root: Optional[Path] = None
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        value = value.upper()
        if value not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return value

    @classmethod
    def from_env(cls) -> "WikiServerSettings":
        """Build settings from GITHUB_WIKI_HOST, GITHUB_WIKI_BRANCH and LOG_LEVEL"""
        values = {}
        if os.getenv("GITHUB_WIKI_HOST"):
            values["host"] = os.environ["GITHUB_WIKI_HOST"]
        if os.getenv("GITHUB_WIKI_BRANCH"):
            values["branch"] = os.environ["GITHUB_WIKI_BRANCH"]
        if os.getenv("LOG_LEVEL"):
            values["log_level"] = os.environ["LOG_LEVEL"]
        return cls(**values)


def load_environment_variables(env_dir: Path | None = None) -> list[str]:
    """Load environment variables from .env files.

    Order of precedence:
    1. System environment variables (never overridden)
    2. Explicit directory .env file (if env_dir provided)
    3. Project .env file (current working directory)

    Returns:
        The .env files that were loaded
    """
    loaded_files: list[str] = []

    candidates = []
    if env_dir is not None:
        candidates.append(env_dir / ".env")
    candidates.append(Path.cwd() / ".env")

    for env_file in candidates:
        if not env_file.exists() or str(env_file) in loaded_files:
            continue
        try:
            load_dotenv(env_file, override=False)
            loaded_files.append(str(env_file))
            logger.info(f"Loaded environment variables from {env_file}")
        except OSError as e:
            logger.warning(f"Failed to load .env file {env_file}: {e}")

    if not loaded_files:
        logger.info("No .env files found, using system environment variables only")

    return loaded_files
