"""
Authentication middleware for Quart routes.

Provides decorators for protecting routes with the session login.
"""

import functools
import logging
from typing import Any, Callable, Dict, Optional

from quart import jsonify, request, session

from common.config import config

logger = logging.getLogger(__name__)

DEV_USER: Dict[str, Any] = {"id": "dev-user", "username": "Developer", "role": "admin"}


def get_session_user() -> Optional[Dict[str, Any]]:
    """Logged-in user stored in the session, or the development user when bypassing."""
    if config.DEV_BYPASS_AUTH:
        return DEV_USER
    user = session.get("user")
    if not isinstance(user, dict) or not user.get("id"):
        return None
    return user


def require_auth(func: Callable) -> Callable:
    """
    Decorator to require a logged-in session for a route.

    The login flow (OAuth callback) stores `{"id": ..., "username": ...}`
    under `session["user"]`. The decorator attaches to the request object:
    - request.user_id: The session user ID
    - request.user: The full session user dict

    Without a session user it returns 401 `{"error": "Unauthorized"}`.
    With DEV_BYPASS_AUTH (never honored in production) every request is
    treated as the development user.

    Usage:
        @app.route('/protected')
        @require_auth
        async def protected_route():
            user_id = request.user_id
            return {'message': f'Hello {user_id}'}
    """

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        user = get_session_user()

        if user is None:
            logger.warning(f"Unauthenticated request to {request.path}")
            return jsonify({"error": "Unauthorized"}), 401

        request.user = user
        request.user_id = str(user["id"])
        logger.debug(f"Authenticated user: {request.user_id}")

        return await func(*args, **kwargs)

    return wrapper
