"""
Content editing services.

- registry: which data files exist and their shapes
- change_report: per-file change summaries for commit messages
- batch_commit: all-or-nothing multi-file commits
- edit_buffer: session working copies and cascading edits
- locations: location id generation
"""

from application.services.content.batch_commit import (
    BatchCommitError,
    BatchCommitService,
    BatchConflictError,
    CommitFile,
    CommitRequest,
    CommitResult,
    InvalidCommitRequestError,
)
from application.services.content.change_report import generate_report
from application.services.content.edit_buffer import EditBuffer, TrackedFile
from application.services.content.locations import location_id
from application.services.content.registry import ShapeKind, default_content, shape_for

__all__ = [
    "BatchCommitError",
    "BatchCommitService",
    "BatchConflictError",
    "CommitFile",
    "CommitRequest",
    "CommitResult",
    "EditBuffer",
    "InvalidCommitRequestError",
    "ShapeKind",
    "TrackedFile",
    "default_content",
    "generate_report",
    "location_id",
    "shape_for",
]
