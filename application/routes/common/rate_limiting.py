"""
Rate limiting utilities for route handlers.

Provides standardized rate limit key functions.
"""

from quart import request

from common.middleware.auth_middleware import get_session_user


async def user_rate_limit_key() -> str:
    """
    Generate rate limit key based on the session user ID.

    The key function runs before the route body, so it reads the session
    user directly. Falls back to IP-based limiting when nobody is logged in.

    Example:
        >>> @rate_limit(10, timedelta(minutes=1), key_function=user_rate_limit_key)
        >>> @require_auth
        >>> async def my_protected_endpoint():
        >>>     pass
    """
    user = get_session_user()
    if user:
        return f"user:{user['id']}"
    return request.remote_addr or "anonymous"
