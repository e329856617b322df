"""
Application routes package.

Contains all API endpoint blueprints for the content dashboard.
"""

from application.routes.actions import actions_bp
from application.routes.content import content_bp

__all__ = ["actions_bp", "content_bp"]
