"""Page name normalization and wiki URL helpers"""

import re

PAGE_EXTENSION = ".md"
DEFAULT_HOST = "github.com"
MIN_REDACT_LENGTH = 8

_WHITESPACE_RUN = re.compile(r"\s+")
_DISALLOWED = re.compile(r"[^a-zA-Z0-9\-_]")


def normalize_page_name(page_name: str) -> str:
    """Normalize a page title to its wiki file name.

    Example: "Architettura del Sistema" -> "Architettura-del-Sistema.md"

    Whitespace runs become a single hyphen, then anything other than ASCII
    letters, digits, hyphens and underscores is dropped. Hyphens produced at
    either end are kept, so "-Draft" addresses "-Draft.md". A title that
    already ends in ".md" keeps its extension, so normalizing a file name
    returns it unchanged. Distinct titles may map to the same file name.
    """
    stem = page_name
    if stem.endswith(PAGE_EXTENSION):
        stem = stem[: -len(PAGE_EXTENSION)]

    stem = _WHITESPACE_RUN.sub("-", stem)
    stem = _DISALLOWED.sub("", stem)

    return f"{stem}{PAGE_EXTENSION}"


def page_title_from_file(file_name: str) -> str:
    """Strip the page extension from a wiki file name"""
    return file_name.removesuffix(PAGE_EXTENSION)


def wiki_clone_url(owner: str, repo: str, token: str, host: str = DEFAULT_HOST) -> str:
    """Create authenticated wiki URL"""
    return f"https://{token}@{host}/{owner}/{repo}.wiki.git"


def wiki_page_url(owner: str, repo: str, file_name: str, host: str = DEFAULT_HOST) -> str:
    """Public URL of a wiki page"""
    return f"https://{host}/{owner}/{repo}/wiki/{page_title_from_file(file_name)}"


def redact_token(text: str, token: str) -> str:
    """Remove a credential from text destined for logs or results.

    The userinfo form used in clone URLs is always masked. Bare occurrences
    are masked only for tokens of MIN_REDACT_LENGTH or more, so a short
    token does not blank out unrelated words in git's messages.
    """
    if not token:
        return text
    text = text.replace(f"{token}@", "*****@")
    if len(token) >= MIN_REDACT_LENGTH:
        text = text.replace(token, "*****")
    return text
