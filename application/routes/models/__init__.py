"""
Request/Response Models for API endpoints.

Provides Pydantic models for type-safe request validation and response serialization.
"""

from .base import ErrorResponse
from .content_models import (
    BatchCommitRequestModel,
    BatchCommitResponse,
    BatchFile,
    FileResponse,
)

__all__ = [
    # Base models
    "ErrorResponse",
    # Content models
    "BatchFile",
    "BatchCommitRequestModel",
    "BatchCommitResponse",
    "FileResponse",
]
