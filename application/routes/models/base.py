"""
Base models for API responses.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """
    Standard error response.

    Consistent error format across all endpoints.
    """

    model_config = ConfigDict(populate_by_name=True)

    error: str = Field(..., description="Error message")
    details: Optional[Any] = Field(None, description="Upstream error body or validation errors")
