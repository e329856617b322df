"""
GitHub Service Package

Service layer for all GitHub API interactions with the content repository.

Main Components:
- GitHubService: Facade over contents, Git Data and Actions endpoints
- API Client: Authenticated GitHub REST requests
"""

from application.services.github.github_service import GitHubService

__all__ = ["GitHubService"]
