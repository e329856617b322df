"""
GitHub Service Factory

Creates GitHubService and BatchCommitService instances bound to the configured
content repository and branch.
"""

import logging
from typing import Optional

from application.services.config_service import ConfigService, get_config_service
from application.services.content.batch_commit import BatchCommitService
from application.services.github.api.client import GitHubAPIClient
from application.services.github.github_service import GitHubService

logger = logging.getLogger(__name__)


class GitHubServiceFactory:
    """
    Factory for creating services that talk to the content repository.

    The target repository and branch come from ConfigService, so call sites
    never carry repository coordinates themselves.
    """

    def __init__(self, config_service: Optional[ConfigService] = None):
        self.config_service = config_service or get_config_service()

    def create_github_service(self) -> GitHubService:
        """
        Create GitHubService for the content repository.

        Raises:
            ValueError: If GITHUB_TOKEN or repository settings are missing
        """
        github_config = self.config_service.get_github_config()
        repo_config = self.config_service.get_content_repo_config()

        logger.debug(
            f"Creating GitHub service for {repo_config.owner}/{repo_config.repository}"
        )
        api_client = GitHubAPIClient(
            token=github_config.token,
            owner=repo_config.owner,
            repository=repo_config.repository,
            base_url=github_config.api_url,
            timeout=github_config.timeout_seconds,
        )
        return GitHubService(api_client=api_client)

    def create_batch_commit_service(self, github_service: Optional[GitHubService] = None) -> BatchCommitService:
        """Create the batch committer for the configured branch."""
        repo_config = self.config_service.get_content_repo_config()
        return BatchCommitService(
            store=github_service or self.create_github_service(),
            branch=repo_config.branch,
        )


def get_github_service() -> GitHubService:
    """
    Convenience function to get GitHubService for the content repository.

    Returns:
        GitHubService instance
    """
    return GitHubServiceFactory().create_github_service()


def get_batch_commit_service() -> BatchCommitService:
    """
    Convenience function to get the batch committer for the content branch.

    Returns:
        BatchCommitService instance
    """
    return GitHubServiceFactory().create_batch_commit_service()
