"""
Main GitHub Service - Unified facade for the content repository.

This service provides a single entry point for:
- Reading JSON files (contents API)
- Git object creation and the branch ref update (Git Data API)
- CI workflow status (Actions API)
"""

from typing import List, Optional, Sequence

import httpx

from application.services.github.api.client import GitHubAPIClient
from application.services.github.api.contents import ContentsOperations
from application.services.github.api.git_data import GitDataOperations
from application.services.github.api.workflows import WorkflowOperations
from application.services.github.models.types import RemoteFile, TreeEntry


class GitHubService:
    """
    Remote content store client bound to one repository.

    Every method is a single network round trip; nothing is cached or retried.
    """

    def __init__(
        self,
        token: Optional[str] = None,
        owner: Optional[str] = None,
        repository: Optional[str] = None,
        api_client: Optional[GitHubAPIClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize GitHub service.

        Args:
            token: GitHub API token
            owner: Repository owner
            repository: Repository name
            api_client: Pre-built client (overrides token/owner/repository)
            transport: httpx transport passed to a newly built client
        """
        self.api_client = api_client or GitHubAPIClient(
            token=token, owner=owner, repository=repository, transport=transport
        )

        self.contents = ContentsOperations(client=self.api_client)
        self.git_data = GitDataOperations(client=self.api_client)
        self.workflows = WorkflowOperations(client=self.api_client)

    async def read_file(self, path: str, ref: Optional[str] = None) -> RemoteFile:
        """Fetch and JSON-decode a file. Raises GitHubNotFoundError when absent."""
        return await self.contents.read_file(path, ref=ref)

    async def read_ref(self, branch: str) -> str:
        """Current tip commit of `branch`."""
        return await self.git_data.read_ref(branch)

    async def read_commit(self, commit_sha: str) -> str:
        """Tree sha of a commit."""
        return await self.git_data.read_commit(commit_sha)

    async def create_blob(self, text: str) -> str:
        return await self.git_data.create_blob(text)

    async def create_tree(self, base_tree_sha: str, entries: Sequence[TreeEntry]) -> str:
        return await self.git_data.create_tree(base_tree_sha, entries)

    async def create_commit(self, message: str, tree_sha: str, parents: List[str]) -> str:
        return await self.git_data.create_commit(message, tree_sha, parents)

    async def update_ref(self, branch: str, commit_sha: str, force: bool = False) -> None:
        """Conditional ref update. Raises GitHubConflictError if the branch moved."""
        await self.git_data.update_ref(branch, commit_sha, force=force)
