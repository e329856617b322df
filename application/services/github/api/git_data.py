"""
GitHub Git Data API operations.

Low-level object access used to land several files in one commit:
ref -> commit -> blobs -> tree -> commit -> ref update.
"""

import logging
from typing import List, Sequence

from application.services.github.api.client import GitHubAPIClient
from application.services.github.api.exceptions import (
    GitHubAPIError,
    GitHubConflictError,
)
from application.services.github.models.types import TreeEntry

logger = logging.getLogger(__name__)

NOT_FAST_FORWARD_MARKER = "fast forward"


def is_ref_conflict(error: GitHubAPIError) -> bool:
    """True if a failed ref update means the branch moved.

    GitHub answers a non-fast-forward update with 422 "Update is not a fast
    forward"; some proxies use 409. Other 422s (rule violations, missing ref)
    are not conflicts.
    """
    if error.status_code == 409:
        return True
    if error.status_code != 422:
        return False
    details = error.details if isinstance(error.details, dict) else {}
    return NOT_FAST_FORWARD_MARKER in str(details.get("message", "")).lower()


class GitDataOperations:
    """Handles GitHub Git Data (refs, commits, trees, blobs) operations."""

    def __init__(self, client: GitHubAPIClient):
        self.client = client

    async def read_ref(self, branch: str) -> str:
        """Return the commit sha at the tip of `branch`."""
        response = await self.client.get(self.client.repo_path(f"git/ref/heads/{branch}"))
        return response["object"]["sha"]

    async def read_commit(self, commit_sha: str) -> str:
        """Return the tree sha a commit points to."""
        response = await self.client.get(self.client.repo_path(f"git/commits/{commit_sha}"))
        return response["tree"]["sha"]

    async def create_blob(self, text: str) -> str:
        """Store `text` as a UTF-8 blob and return its sha."""
        response = await self.client.post(
            self.client.repo_path("git/blobs"),
            data={"content": text, "encoding": "utf-8"},
        )
        return response["sha"]

    async def create_tree(self, base_tree_sha: str, entries: Sequence[TreeEntry]) -> str:
        """Create a tree equal to `base_tree_sha` with `entries` replaced or added."""
        response = await self.client.post(
            self.client.repo_path("git/trees"),
            data={
                "base_tree": base_tree_sha,
                "tree": [entry.to_payload() for entry in entries],
            },
        )
        return response["sha"]

    async def create_commit(self, message: str, tree_sha: str, parents: List[str]) -> str:
        """Create a commit object and return its sha."""
        response = await self.client.post(
            self.client.repo_path("git/commits"),
            data={"message": message, "tree": tree_sha, "parents": list(parents)},
        )
        return response["sha"]

    async def update_ref(self, branch: str, commit_sha: str, force: bool = False) -> None:
        """Point `branch` at `commit_sha`.

        With force=False GitHub only accepts a fast-forward, so the update fails
        if the branch moved since the parent commit was read.

        Raises:
            GitHubConflictError: If the branch moved
            GitHubAPIError: On any other failure
        """
        try:
            await self.client.patch(
                self.client.repo_path(f"git/refs/heads/{branch}"),
                data={"sha": commit_sha, "force": force},
            )
        except GitHubAPIError as e:
            if is_ref_conflict(e):
                logger.warning(f"Ref update for {branch} rejected: branch moved")
                raise GitHubConflictError(
                    f"Branch {branch} moved; update to {commit_sha} rejected",
                    status_code=409,
                    details=e.details,
                ) from e
            raise
