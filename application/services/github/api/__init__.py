"""
GitHub API Module

Handles all GitHub REST API interactions including:
- Contents reads
- Git Data object creation and ref updates
- Workflow run status
"""

from application.services.github.api.client import GitHubAPIClient
from application.services.github.api.contents import ContentsOperations
from application.services.github.api.exceptions import (
    ContentParseError,
    GitHubAPIError,
    GitHubConflictError,
    GitHubNotFoundError,
)
from application.services.github.api.git_data import GitDataOperations
from application.services.github.api.workflows import WorkflowOperations

__all__ = [
    "GitHubAPIClient",
    "ContentsOperations",
    "GitDataOperations",
    "WorkflowOperations",
    "ContentParseError",
    "GitHubAPIError",
    "GitHubConflictError",
    "GitHubNotFoundError",
]
