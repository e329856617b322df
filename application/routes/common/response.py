"""
Response utilities for standardized API responses.

Provides consistent response formatting across all routes.
"""

from typing import Any, Tuple

from quart import Response, jsonify

from application.routes.models.base import ErrorResponse


class APIResponse:
    """
    Standardized API response helper.

    Success bodies are returned as given; errors are `{"error", "details"?}`.
    """

    @staticmethod
    def success(data: Any, status: int = 200) -> Tuple[Response, int]:
        """
        Create a successful response.

        Example:
            >>> return APIResponse.success({"files": ["about.json"]})
        """
        return jsonify(data), status

    @staticmethod
    def error(message: str, status: int = 400, details: Any = None) -> Tuple[Response, int]:
        """
        Create an error response.

        Args:
            message: Error message
            status: HTTP status code (default: 400)
            details: Upstream error body or validation errors (optional)

        Example:
            >>> return APIResponse.error("Invalid file name", 400)
            >>> return APIResponse.error("Batch update failed", 422, details=github_body)
        """
        error_data = ErrorResponse(error=message, details=details)
        return jsonify(error_data.model_dump(exclude_none=True)), status

    @staticmethod
    def not_found(resource: str = "Resource") -> Tuple[Response, int]:
        return APIResponse.error(f"{resource} not found", 404)

    @staticmethod
    def forbidden(message: str = "Access denied") -> Tuple[Response, int]:
        return APIResponse.error(message, 403)

    @staticmethod
    def unauthorized(message: str = "Unauthorized") -> Tuple[Response, int]:
        return APIResponse.error(message, 401)

    @staticmethod
    def internal_error(message: str = "Internal server error") -> Tuple[Response, int]:
        return APIResponse.error(message, 500)
