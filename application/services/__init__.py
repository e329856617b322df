"""
Application services package.

Contains business logic services for the content dashboard.
"""

from application.services.github.github_service import GitHubService
from application.services.github_service_factory import (
    GitHubServiceFactory,
    get_batch_commit_service,
    get_github_service,
)

__all__ = [
    "GitHubService",
    "GitHubServiceFactory",
    "get_batch_commit_service",
    "get_github_service",
]
