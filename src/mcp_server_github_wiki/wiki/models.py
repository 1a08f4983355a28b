"""Pydantic models for wiki tools"""

import json
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class WikiConfig(BaseModel):
    """Which wiki to operate on and how to authenticate"""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    owner: str = Field(
        min_length=1,
        description="GitHub repository owner (username or organization)",
    )
    repo: str = Field(min_length=1, description="GitHub repository name")
    token: str = Field(
        min_length=1,
        repr=False,
        description="GitHub personal access token with repo scope",
    )


class WriteWikiPage(WikiConfig):
    page_name: str = Field(
        alias="pageName",
        description='Name of the wiki page (e.g., "Architecture" or "API Documentation")',
    )
    content: str = Field(description="Markdown content for the wiki page")
    commit_message: Optional[str] = Field(
        default=None,
        alias="commitMessage",
        description='Optional commit message (defaults to "Update {fileName}")',
    )


class ReadWikiPage(WikiConfig):
    page_name: str = Field(alias="pageName", description="Name of the wiki page to read")


class AppendToWikiPage(WikiConfig):
    page_name: str = Field(alias="pageName", description="Name of the wiki page to append to")
    content: str = Field(description="Markdown content to append to the page")
    commit_message: Optional[str] = Field(
        default=None,
        alias="commitMessage",
        description='Optional commit message (defaults to "Append to {fileName}")',
    )


class ListWikiPages(WikiConfig):
    pass


class DeleteWikiPage(WikiConfig):
    page_name: str = Field(alias="pageName", description="Name of the wiki page to delete")
    commit_message: Optional[str] = Field(
        default=None,
        alias="commitMessage",
        description='Optional commit message (defaults to "Delete {fileName}")',
    )


class WikiPageInfo(BaseModel):
    name: str
    path: str
    size: int


class OperationResult(BaseModel):
    """Tagged outcome of a wiki tool call.

    Successful results carry the operation payload, failed ones a message
    and the error category. ``to_json`` produces the text returned to the
    MCP client: ``{"success": true, ...payload}`` or
    ``{"success": false, "error": ..., "errorType": ...}``.
    """

    success: bool
    payload: Dict[str, Any] = Field(default_factory=dict)
    error: Optional[str] = None
    error_type: Optional[str] = None

    @classmethod
    def ok(cls, **payload: Any) -> "OperationResult":
        return cls(success=True, payload=payload)

    @classmethod
    def fail(cls, error: str, error_type: str) -> "OperationResult":
        return cls(success=False, error=error, error_type=error_type)

    @property
    def is_error(self) -> bool:
        return not self.success

    def to_dict(self) -> Dict[str, Any]:
        if self.success:
            return {"success": True, **self.payload}
        return {"success": False, "error": self.error, "errorType": self.error_type}

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)
