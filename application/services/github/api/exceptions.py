"""
Exceptions raised by the GitHub API layer.
"""

from typing import Any


class GitHubAPIError(Exception):
    """Non-success response (or transport failure) from the GitHub API.

    Attributes:
        status_code: Upstream HTTP status, 502 for transport errors
        details: Upstream response body (parsed JSON when possible)
    """

    def __init__(self, message: str, status_code: int = 502, details: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.details = details if details is not None else {"message": message}


class GitHubNotFoundError(GitHubAPIError):
    """The requested object does not exist at the given ref (404)."""


class GitHubConflictError(GitHubAPIError):
    """A conditional ref update was rejected because the branch moved."""


class ContentParseError(Exception):
    """Remote file content is not valid UTF-8 JSON."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Failed to parse {path}: {reason}")
        self.path = path
        self.reason = reason
