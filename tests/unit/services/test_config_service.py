"""Unit tests for ConfigService and GitHubServiceFactory."""

from unittest.mock import patch

import pytest

from application.services.config_service import ConfigService, ContentRepoConfig, GitHubConfig
from application.services.github_service_factory import GitHubServiceFactory


class TestConfigObjects:
    """Test config dataclass validation."""

    def test_github_config_requires_token(self):
        with pytest.raises(ValueError, match="GITHUB_TOKEN"):
            GitHubConfig(token="")

    def test_content_repo_requires_coordinates(self):
        with pytest.raises(ValueError):
            ContentRepoConfig(owner="octo", repository="", branch="master")

    def test_path_for(self):
        repo = ContentRepoConfig(owner="octo", repository="site", branch="master", data_dir="data/")
        assert repo.path_for("locations.json") == "data/locations.json"

    def test_path_for_without_data_dir(self):
        repo = ContentRepoConfig(owner="octo", repository="site", branch="master", data_dir="")
        assert repo.path_for("locations.json") == "locations.json"


class TestConfigService:
    """Test cached config loading."""

    def test_content_repo_from_environment(self):
        with patch("application.services.config_service.config") as mock_config:
            mock_config.CONTENT_REPO_OWNER = "octo"
            mock_config.CONTENT_REPO_NAME = "site"
            mock_config.CONTENT_BRANCH = "main"
            mock_config.CONTENT_DATA_DIR = "data"
            service = ConfigService()

            repo = service.get_content_repo_config()

        assert repo == ContentRepoConfig(owner="octo", repository="site", branch="main", data_dir="data")
        assert service.get_content_repo_config() is repo

    def test_clear_cache(self):
        with patch("application.services.config_service.config") as mock_config:
            mock_config.GITHUB_TOKEN = "t1"
            mock_config.GITHUB_API_URL = "https://api.github.test"
            mock_config.GITHUB_TIMEOUT_SECONDS = 5.0
            service = ConfigService()
            first = service.get_github_config()
            service.clear_cache()
            mock_config.GITHUB_TOKEN = "t2"
            second = service.get_github_config()

        assert first.token == "t1"
        assert second.token == "t2"


class TestGitHubServiceFactory:
    """Test service construction from configuration."""

    def make_factory(self):
        service = ConfigService()
        service._github_config = GitHubConfig(token="tok", api_url="https://api.github.test", timeout_seconds=5.0)
        service._content_repo_config = ContentRepoConfig(owner="octo", repository="site", branch="main")
        return GitHubServiceFactory(config_service=service)

    def test_create_github_service(self):
        github_service = self.make_factory().create_github_service()

        client = github_service.api_client
        assert client.token == "tok"
        assert client.base_url == "https://api.github.test"
        assert client.timeout == 5.0
        assert client.repo_path("git/blobs") == "repos/octo/site/git/blobs"

    def test_create_batch_commit_service(self):
        committer = self.make_factory().create_batch_commit_service()
        assert committer.branch == "main"
