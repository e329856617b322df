"""Middleware package for common authentication and authorization."""

from common.middleware.auth_middleware import get_session_user, require_auth

__all__ = ["get_session_user", "require_auth"]
