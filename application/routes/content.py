"""
Content Routes for the dashboard.

Read access to the editable data files and the batch commit endpoint that
writes several of them as one commit.
"""

import logging
from datetime import timedelta

from quart import Blueprint, request
from quart_rate_limiter import rate_limit

from application.routes.common.constants import (
    RATE_LIMIT_BATCH_COMMIT,
    RATE_LIMIT_STANDARD,
)
from application.routes.common.rate_limiting import user_rate_limit_key
from application.routes.common.response import APIResponse
from application.routes.common.validation import validate_json
from application.routes.models.content_models import (
    BatchCommitRequestModel,
    BatchCommitResponse,
    FileResponse,
)
from application.services.config_service import get_config_service
from application.services.content.batch_commit import (
    BatchCommitError,
    BatchConflictError,
    CommitFile,
    CommitRequest,
    InvalidCommitRequestError,
)
from application.services.content.registry import default_content, editable_files
from application.services.github.api.exceptions import (
    ContentParseError,
    GitHubAPIError,
    GitHubNotFoundError,
)
from application.services.github_service_factory import (
    get_batch_commit_service,
    get_github_service,
)
from application.services.user_directory import get_user_directory
from common.middleware.auth_middleware import require_auth

logger = logging.getLogger(__name__)

content_bp = Blueprint("content", __name__, url_prefix="/api")


@content_bp.route("/files", methods=["GET"])
@require_auth
async def list_files():
    """
    List the editable data files.

    Returns:
        200: {"files": ["about.json", ...]}
    """
    logger.debug(f"GET /api/files user={request.user_id}")
    return APIResponse.success({"files": editable_files()})


@content_bp.route("/file/<path:name>", methods=["GET"])
@rate_limit(RATE_LIMIT_STANDARD, timedelta(minutes=1), key_function=user_rate_limit_key)
@require_auth
async def get_file(name: str):
    """
    Fetch one data file from the content branch.

    A file that does not exist yet is returned as its default skeleton so
    the editor can create it.

    Returns:
        200: {"sha": "...", "content": ...}
        200: {"sha": null, "content": <default>, "notFound": true}
        400: Name is empty or contains "/"
        502: File exists but is not valid JSON
    """
    if not name or "/" in name:
        return APIResponse.error("Invalid file name", 400)

    repo_config = get_config_service().get_content_repo_config()
    path = repo_config.path_for(name)
    logger.debug(f"GET /api/file/{name} user={request.user_id}")

    try:
        remote = await get_github_service().read_file(path, ref=repo_config.branch)
    except GitHubNotFoundError:
        logger.info(f"{path} not found on GitHub, returning default")
        body = FileResponse(sha=None, content=default_content(name), not_found=True)
        return APIResponse.success(body.model_dump(by_alias=True))
    except ContentParseError as e:
        logger.error(f"Failed to parse {path}: {e.reason}")
        return APIResponse.error("Failed to fetch file", 502, details={"message": str(e)})
    except GitHubAPIError as e:
        logger.error(f"Failed to fetch {path}: status={e.status_code} details={e.details}")
        return APIResponse.error("Failed to fetch file", e.status_code, details=e.details)

    body = FileResponse(sha=remote.sha, content=remote.content)
    return APIResponse.success(body.model_dump(by_alias=True, exclude={"not_found"}))


@content_bp.route("/batch", methods=["POST"])
@rate_limit(RATE_LIMIT_BATCH_COMMIT, timedelta(minutes=1), key_function=user_rate_limit_key)
@require_auth
@validate_json(BatchCommitRequestModel)
async def batch_update():
    """
    Commit several files to the content branch as a single commit.

    Request body:
        {
            "files": [{"path": "data/locations.json", "content": [...]}],
            "commitMessage": "Add new venue"
        }

    Returns:
        200: {"ok": true, "commitSha": "...", "fileShas": {path: sha}}
        400: Empty file list, duplicate or unsafe paths
        409: The branch moved while committing; reload and retry
        4xx/5xx: Upstream GitHub status with its error body in details
    """
    data: BatchCommitRequestModel = request.validated_data
    actor_tag = get_user_directory().actor_tag_for(request.user_id)
    logger.info(
        f"POST /api/batch user={request.user_id} actor={actor_tag} files={len(data.files)}"
    )

    commit_request = CommitRequest(
        files=[CommitFile(path=f.path, content=f.content) for f in data.files],
        commit_message=data.commit_message,
    )

    try:
        result = await get_batch_commit_service().commit_batch(commit_request, actor_tag)
    except InvalidCommitRequestError as e:
        return APIResponse.error(str(e), 400)
    except BatchConflictError as e:
        logger.warning(f"Batch commit conflict at {e.step}: {e.details}")
        return APIResponse.error(
            "Branch was updated concurrently; reload and retry", 409, details=e.details
        )
    except BatchCommitError as e:
        logger.error(f"Batch update failed at {e.step}: status={e.status_code}")
        return APIResponse.error("Batch update failed", e.status_code, details=e.details)

    body = BatchCommitResponse(commit_sha=result.commit_id, file_shas=result.file_shas)
    return APIResponse.success(body.model_dump(by_alias=True))
