"""
Request/Response models for content routes.

Field names follow the dashboard's JSON (camelCase on the wire).
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class BatchFile(BaseModel):
    """One file in a batch commit."""

    path: str = Field(
        ...,
        description="Repository-relative path",
        examples=["data/locations.json"],
    )
    content: Any = Field(..., description="Full JSON value to write")


class BatchCommitRequestModel(BaseModel):
    """
    Request model for a batch commit.

    The file list is checked for emptiness, duplicates and unsafe paths by the
    batch committer so every caller gets the same rules.
    """

    model_config = ConfigDict(populate_by_name=True)

    files: List[BatchFile] = Field(..., description="Files to commit together")
    commit_message: Optional[str] = Field(
        default=None,
        alias="commitMessage",
        description="Commit message; a default is used when omitted",
    )


class BatchCommitResponse(BaseModel):
    """Response model for a landed batch commit."""

    model_config = ConfigDict(populate_by_name=True)

    ok: bool = True
    commit_sha: str = Field(..., alias="commitSha")
    file_shas: Dict[str, str] = Field(default_factory=dict, alias="fileShas")


class FileResponse(BaseModel):
    """Response model for a single data file."""

    model_config = ConfigDict(populate_by_name=True)

    sha: Optional[str] = Field(None, description="Revision marker; null when the file does not exist")
    content: Any
    not_found: Optional[bool] = Field(None, alias="notFound")
