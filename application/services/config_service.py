"""
Configuration Service for centralized environment variable management.

Provides validated configuration objects for the GitHub API and the target
content repository.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from common.config import config

logger = logging.getLogger(__name__)


@dataclass
class GitHubConfig:
    """GitHub API access configuration."""

    token: str
    api_url: str = "https://api.github.com"
    timeout_seconds: float = 30.0

    def __post_init__(self):
        """Validate required fields."""
        if not self.token:
            raise ValueError("GitHub configuration incomplete. Please set GITHUB_TOKEN")


@dataclass(frozen=True)
class ContentRepoConfig:
    """The single repository and branch the dashboard edits."""

    owner: str
    repository: str
    branch: str
    data_dir: str = "data"

    def __post_init__(self):
        """Validate required fields."""
        if not all([self.owner, self.repository, self.branch]):
            raise ValueError(
                "Content repository configuration incomplete. Please set "
                "CONTENT_REPO_OWNER, CONTENT_REPO_NAME, and CONTENT_BRANCH"
            )

    def path_for(self, file_name: str) -> str:
        """Repository-relative path of a data file."""
        if not self.data_dir:
            return file_name
        return f"{self.data_dir.rstrip('/')}/{file_name}"


class ConfigService:
    """
    Service for loading and managing application configuration.

    Caches configuration objects after first load.
    """

    def __init__(self):
        """Initialize configuration service with empty cache."""
        self._github_config: Optional[GitHubConfig] = None
        self._content_repo_config: Optional[ContentRepoConfig] = None

    def get_github_config(self) -> GitHubConfig:
        """
        Get GitHub API configuration.

        Raises:
            ValueError: If GITHUB_TOKEN is missing
        """
        if self._github_config is None:
            self._github_config = GitHubConfig(
                token=config.GITHUB_TOKEN or "",
                api_url=config.GITHUB_API_URL,
                timeout_seconds=config.GITHUB_TIMEOUT_SECONDS,
            )
            logger.debug(f"Loaded GitHub configuration for {config.GITHUB_API_URL}")

        return self._github_config

    def get_content_repo_config(self) -> ContentRepoConfig:
        """
        Get target repository configuration.

        Example:
            >>> repo = ConfigService().get_content_repo_config()
            >>> repo.path_for("locations.json")
            'data/locations.json'
        """
        if self._content_repo_config is None:
            self._content_repo_config = ContentRepoConfig(
                owner=config.CONTENT_REPO_OWNER,
                repository=config.CONTENT_REPO_NAME,
                branch=config.CONTENT_BRANCH,
                data_dir=config.CONTENT_DATA_DIR,
            )
            logger.debug(
                f"Loaded content repository configuration: "
                f"{config.CONTENT_REPO_OWNER}/{config.CONTENT_REPO_NAME}@{config.CONTENT_BRANCH}"
            )

        return self._content_repo_config

    def clear_cache(self) -> None:
        """
        Clear cached configuration objects.

        Useful for testing or when environment variables change at runtime.
        """
        self._github_config = None
        self._content_repo_config = None
        logger.debug("Configuration cache cleared")


# Singleton instance for application-wide use
_config_service_instance: Optional[ConfigService] = None


def get_config_service() -> ConfigService:
    """
    Get singleton ConfigService instance.

    Returns:
        ConfigService: Shared configuration service instance
    """
    global _config_service_instance
    if _config_service_instance is None:
        _config_service_instance = ConfigService()
    return _config_service_instance
