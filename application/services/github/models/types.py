"""
Shared types and models for GitHub operations.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


@dataclass
class RemoteFile:
    """A JSON file read from the repository at some ref."""

    path: str
    sha: str
    content: Any


@dataclass(frozen=True)
class TreeEntry:
    """One blob placement in a tree-creation request."""

    path: str
    sha: str
    mode: str = "100644"
    type: str = "blob"

    def to_payload(self) -> Dict[str, str]:
        return {"path": self.path, "mode": self.mode, "type": self.type, "sha": self.sha}


@dataclass
class WorkflowRunInfo:
    run_id: int
    name: Optional[str]
    event: Optional[str]
    status: Optional[str]
    conclusion: Optional[str]
    html_url: Optional[str]
    created_at: Optional[str]
    updated_at: Optional[str]

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "WorkflowRunInfo":
        return cls(
            run_id=data["id"],
            name=data.get("name"),
            event=data.get("event"),
            status=data.get("status"),
            conclusion=data.get("conclusion"),
            html_url=data.get("html_url"),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["id"] = data.pop("run_id")
        return data


@dataclass
class WorkflowJobInfo:
    job_id: int
    name: Optional[str]
    status: Optional[str]
    conclusion: Optional[str]
    started_at: Optional[str]
    completed_at: Optional[str]
    html_url: Optional[str]

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "WorkflowJobInfo":
        return cls(
            job_id=data["id"],
            name=data.get("name"),
            status=data.get("status"),
            conclusion=data.get("conclusion"),
            started_at=data.get("started_at"),
            completed_at=data.get("completed_at"),
            html_url=data.get("html_url"),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["id"] = data.pop("job_id")
        return data
