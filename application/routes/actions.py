"""
Actions Routes

Reports the latest GitHub Actions run on the content branch so editors can
see whether their commit has been published.
"""

import logging
from datetime import timedelta

from quart import Blueprint, request
from quart_rate_limiter import rate_limit

from application.routes.common.constants import ACTIONS_JOBS_PER_PAGE, RATE_LIMIT_STANDARD
from application.routes.common.rate_limiting import user_rate_limit_key
from application.routes.common.response import APIResponse
from application.services.config_service import get_config_service
from application.services.github.api.exceptions import GitHubAPIError
from application.services.github_service_factory import get_github_service
from common.middleware.auth_middleware import require_auth

logger = logging.getLogger(__name__)

actions_bp = Blueprint("actions", __name__, url_prefix="/api/actions")


@actions_bp.route("/latest", methods=["GET"])
@rate_limit(RATE_LIMIT_STANDARD, timedelta(minutes=1), key_function=user_rate_limit_key)
@require_auth
async def latest_run():
    """
    Latest workflow run on the content branch with its jobs.

    Returns:
        200: {"run": {...}, "jobs": [...]} or {"run": null, "jobs": []}
        4xx/5xx: Upstream GitHub status with its error body in details
    """
    branch = get_config_service().get_content_repo_config().branch
    logger.debug(f"GET /api/actions/latest user={request.user_id} branch={branch}")

    workflows = get_github_service().workflows
    try:
        run = await workflows.get_latest_run(branch=branch)
        if run is None:
            return APIResponse.success({"run": None, "jobs": []})
        jobs = await workflows.list_run_jobs(run.run_id, per_page=ACTIONS_JOBS_PER_PAGE)
    except GitHubAPIError as e:
        logger.error(f"Failed to fetch actions status: status={e.status_code} details={e.details}")
        return APIResponse.error("Failed to fetch actions status", e.status_code, details=e.details)

    return APIResponse.success({"run": run.to_dict(), "jobs": [job.to_dict() for job in jobs]})
