"""
Centralized error handling middleware.

Provides consistent error handling across all routes with automatic
error logging and standardized response format.

GitHub and batch-commit failures are translated by the routes that call
GitHub, so each endpoint chooses its own message and status. The handlers
here only cover errors that no route handles itself.
"""

import logging

from pydantic import ValidationError
from quart import Quart, jsonify
from werkzeug.exceptions import HTTPException

from application.routes.common.response import APIResponse

logger = logging.getLogger(__name__)


def register_error_handlers(app: Quart) -> None:
    """
    Register centralized error handlers for the application.

    Handles:
    - ValidationError (Pydantic) → 400 Bad Request
    - PermissionError → 403 Forbidden
    - ValueError → 400 Bad Request
    - HTTPException (Werkzeug) → Appropriate status
    - Exception (Generic) → 500 Internal Server Error

    Args:
        app: Quart application instance
    """

    @app.errorhandler(ValidationError)
    async def handle_validation_error(error: ValidationError):
        """Returns 400 Bad Request with detailed validation errors."""
        errors = []
        for err in error.errors():
            field = " -> ".join(str(loc) for loc in err["loc"])
            errors.append({"field": field, "message": err["msg"], "type": err["type"]})

        logger.warning(f"Validation error: {errors}")

        return APIResponse.error("Validation failed", 400, details={"errors": errors})

    @app.errorhandler(PermissionError)
    async def handle_permission_error(error: PermissionError):
        """Returns 403 Forbidden."""
        logger.warning(f"Permission denied: {error}")
        return APIResponse.forbidden(str(error) or "Access denied")

    @app.errorhandler(ValueError)
    async def handle_value_error(error: ValueError):
        """
        Handle value errors (typically from business logic).

        Returns 400 Bad Request.
        """
        logger.warning(f"Value error: {error}")
        return APIResponse.error(str(error), 400)

    @app.errorhandler(HTTPException)
    async def handle_http_exception(error: HTTPException):
        """
        Handle Werkzeug HTTP exceptions.

        Preserves the original HTTP status code.
        """
        logger.info(f"HTTP exception: {error.code} - {error.description}")

        return (
            jsonify(
                {"error": error.name, "message": error.description, "status": "error"}
            ),
            error.code,
        )

    @app.errorhandler(404)
    async def handle_not_found(error):
        return APIResponse.not_found("Endpoint")

    @app.errorhandler(405)
    async def handle_method_not_allowed(error):
        return APIResponse.error("Method not allowed", 405)

    @app.errorhandler(Exception)
    async def handle_generic_exception(error: Exception):
        """
        Handle all uncaught exceptions.

        Returns 500 Internal Server Error.
        Logs full stack trace for debugging.
        """
        logger.exception(f"Unhandled exception: {error}")

        # In production, hide implementation details
        return APIResponse.internal_error("An unexpected error occurred")
