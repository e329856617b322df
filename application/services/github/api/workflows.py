"""
GitHub Actions workflow operations.

Read-only view of the content repository's CI runs.
"""

import logging
from typing import List, Optional

from application.services.github.api.client import GitHubAPIClient
from application.services.github.models.types import WorkflowJobInfo, WorkflowRunInfo

logger = logging.getLogger(__name__)


class WorkflowOperations:
    """Handles GitHub Actions workflow operations."""

    def __init__(self, client: GitHubAPIClient):
        """Initialize workflow operations.

        Args:
            client: GitHub API client bound to the content repository
        """
        self.client = client

    async def list_workflow_runs(self, branch: Optional[str] = None, per_page: int = 30) -> List[dict]:
        """List workflow runs, newest first.

        Args:
            branch: Only runs triggered on this branch
            per_page: Results per page

        Returns:
            List of workflow run data
        """
        params = {"per_page": per_page}
        if branch:
            params["branch"] = branch

        response = await self.client.get(self.client.repo_path("actions/runs"), params=params)
        return response.get("workflow_runs", []) if response else []

    async def get_latest_run(self, branch: Optional[str] = None) -> Optional[WorkflowRunInfo]:
        """Return the most recent run on `branch`, or None when there are none."""
        runs = await self.list_workflow_runs(branch=branch, per_page=1)
        if not runs:
            return None
        return WorkflowRunInfo.from_api(runs[0])

    async def list_run_jobs(self, run_id: int, per_page: int = 20) -> List[WorkflowJobInfo]:
        """List the jobs of a workflow run."""
        response = await self.client.get(
            self.client.repo_path(f"actions/runs/{run_id}/jobs"),
            params={"per_page": per_page},
        )
        jobs = response.get("jobs", []) if response else []
        logger.debug(f"Fetched {len(jobs)} jobs for workflow run {run_id}")
        return [WorkflowJobInfo.from_api(job) for job in jobs]
