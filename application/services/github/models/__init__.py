"""
GitHub Models Module

Shared dataclasses for GitHub operations.
"""

from application.services.github.models.types import (
    RemoteFile,
    TreeEntry,
    WorkflowJobInfo,
    WorkflowRunInfo,
)

__all__ = [
    "RemoteFile",
    "TreeEntry",
    "WorkflowJobInfo",
    "WorkflowRunInfo",
]
