"""
Batch commit orchestration.

Lands several JSON files in the content repository as exactly one commit
using the Git Data API:

    read ref -> read commit -> (old contents for the report) -> blobs
    -> one tree -> one commit -> non-forced ref update

Nothing moves the branch until the final ref update, so any earlier failure
leaves only unreachable objects behind. A branch that moved since the tip was
read makes the ref update fail with BatchConflictError; the caller decides
whether to retry the whole batch.
"""

import asyncio
import json
import logging
import posixpath
from dataclasses import dataclass, field
from typing import Any, Awaitable, Dict, List, Optional, Protocol, Sequence, TypeVar

from application.services.content.change_report import generate_report
from application.services.content.registry import default_content
from application.services.github.api.exceptions import (
    GitHubAPIError,
    GitHubConflictError,
    GitHubNotFoundError,
)
from application.services.github.models.types import RemoteFile, TreeEntry
from common.config.config import DEFAULT_COMMIT_MESSAGE

logger = logging.getLogger(__name__)

T = TypeVar("T")

UNKNOWN_ACTOR = "unknown"


class ContentStore(Protocol):
    """Remote object store the orchestrator writes through (GitHubService)."""

    async def read_file(self, path: str, ref: Optional[str] = None) -> RemoteFile: ...

    async def read_ref(self, branch: str) -> str: ...

    async def read_commit(self, commit_sha: str) -> str: ...

    async def create_blob(self, text: str) -> str: ...

    async def create_tree(self, base_tree_sha: str, entries: Sequence[TreeEntry]) -> str: ...

    async def create_commit(self, message: str, tree_sha: str, parents: List[str]) -> str: ...

    async def update_ref(self, branch: str, commit_sha: str, force: bool = False) -> None: ...


@dataclass
class CommitFile:
    path: str
    content: Any


@dataclass
class CommitRequest:
    files: List[CommitFile]
    commit_message: Optional[str] = None


@dataclass
class CommitResult:
    """Outcome of a landed batch.

    `file_shas` maps each committed path to its new blob sha, which is also
    the file's new revision marker as reported by the contents API.
    """

    commit_id: str
    file_shas: Dict[str, str] = field(default_factory=dict)
    report: List[str] = field(default_factory=list)


class InvalidCommitRequestError(ValueError):
    """The request is empty or malformed; rejected before any network call."""


class BatchCommitError(Exception):
    """A remote step failed; the branch ref was not updated.

    Attributes:
        step: Name of the failing step (read_ref, create_blob, update_ref, ...)
        status_code: Upstream HTTP status
        details: Upstream error body
    """

    def __init__(self, step: str, status_code: int, details: Any = None):
        super().__init__(f"Batch commit failed at {step} (status {status_code})")
        self.step = step
        self.status_code = status_code
        self.details = details


class BatchConflictError(BatchCommitError):
    """The branch moved between reading its tip and updating it."""


def serialize_content(content: Any) -> str:
    """Blob text for a content value: 4-space indent, key order as given.

    NaN and Infinity are rejected (ValueError); they are not valid JSON.
    """
    return json.dumps(content, indent=4, ensure_ascii=False, allow_nan=False)


def build_commit_message(message: Optional[str], actor_tag: str, report_lines: List[str]) -> str:
    """Caller message, then the actor tag, then the change report."""
    full_message = message or DEFAULT_COMMIT_MESSAGE
    full_message += f"\n\nUser: {actor_tag or UNKNOWN_ACTOR}"
    if report_lines:
        full_message += "\n\nChanges:\n" + "\n".join(report_lines)
    return full_message


def validate_request(request: CommitRequest) -> List[str]:
    """Check a request and return the serialized text of each file.

    Raises:
        InvalidCommitRequestError: On empty file lists, duplicate or unsafe
            paths, or content that is not JSON-serializable
    """
    if not request.files:
        raise InvalidCommitRequestError("No files provided")

    seen = set()
    texts = []
    for commit_file in request.files:
        path = commit_file.path
        _validate_path(path)
        if path in seen:
            raise InvalidCommitRequestError(f"Duplicate path in request: {path}")
        seen.add(path)

        try:
            texts.append(serialize_content(commit_file.content))
        except (TypeError, ValueError) as e:
            raise InvalidCommitRequestError(f"Content for {path} is not JSON-serializable: {e}") from e

    return texts


def _validate_path(path: str) -> None:
    if not isinstance(path, str) or not path.strip():
        raise InvalidCommitRequestError("File path must be a non-empty string")
    if path.startswith("/") or "\\" in path:
        raise InvalidCommitRequestError(f"File path must be repository-relative: {path}")
    segments = path.split("/")
    if any(segment in ("", ".", "..") for segment in segments) or posixpath.normpath(path) != path:
        raise InvalidCommitRequestError(f"Invalid file path: {path}")


def _as_batch_error(step: str, error: BaseException) -> BatchCommitError:
    if isinstance(error, GitHubConflictError):
        return BatchConflictError(step, error.status_code, error.details)
    if isinstance(error, GitHubAPIError):
        return BatchCommitError(step, error.status_code, error.details)
    # Malformed upstream payloads (missing sha keys and the like)
    return BatchCommitError(step, 502, {"message": f"{type(error).__name__}: {error}"})


class BatchCommitService:
    """The only code path that advances the content branch."""

    def __init__(self, store: ContentStore, branch: str):
        """
        Args:
            store: Remote content store (GitHubService in production)
            branch: The single target branch
        """
        self.store = store
        self.branch = branch

    async def commit_batch(self, request: CommitRequest, actor_tag: str) -> CommitResult:
        """Commit every file in `request` as one commit on the target branch.

        Args:
            request: Files to write and the caller's commit message
            actor_tag: Anonymized identifier recorded in the commit message

        Returns:
            CommitResult with the new commit sha and per-file blob shas

        Raises:
            InvalidCommitRequestError: Before any network call
            BatchConflictError: The branch moved; nothing was updated
            BatchCommitError: Any other remote failure; nothing was updated
        """
        texts = validate_request(request)
        paths = [commit_file.path for commit_file in request.files]
        logger.info(f"Starting batch commit of {len(paths)} file(s) to {self.branch}: {paths}")

        tip_sha = await self._run_step("read_ref", self.store.read_ref(self.branch))
        base_tree_sha = await self._run_step("read_commit", self.store.read_commit(tip_sha))
        logger.debug(f"Base commit {tip_sha}, tree {base_tree_sha}")

        old_contents = await asyncio.gather(
            *(self._read_old_content(path, tip_sha) for path in paths)
        )
        report: List[str] = []
        for commit_file, old_content in zip(request.files, old_contents):
            report.extend(generate_report(old_content, commit_file.content, commit_file.path))

        blob_shas = await self._create_blobs(texts)
        file_shas = dict(zip(paths, blob_shas))

        tree_sha = await self._run_step(
            "create_tree",
            self.store.create_tree(
                base_tree_sha, [TreeEntry(path=path, sha=sha) for path, sha in file_shas.items()]
            ),
        )

        message = build_commit_message(request.commit_message, actor_tag, report)
        commit_sha = await self._run_step(
            "create_commit", self.store.create_commit(message, tree_sha, [tip_sha])
        )

        await self._run_step("update_ref", self.store.update_ref(self.branch, commit_sha, force=False))

        logger.info(f"Batch commit successful: {commit_sha} ({len(paths)} file(s))")
        return CommitResult(commit_id=commit_sha, file_shas=file_shas, report=report)

    async def _run_step(self, step: str, awaitable: Awaitable[T]) -> T:
        try:
            return await awaitable
        except (GitHubAPIError, KeyError, TypeError) as e:
            error = _as_batch_error(step, e)
            logger.error(f"Batch commit step {step} failed: status={error.status_code} details={error.details}")
            raise error from e

    async def _create_blobs(self, texts: List[str]) -> List[str]:
        # Blob writes are independent; wait for all so none is left running
        results = await asyncio.gather(
            *(self.store.create_blob(text) for text in texts), return_exceptions=True
        )
        for result in results:
            if isinstance(result, BaseException):
                error = _as_batch_error("create_blob", result)
                logger.error(f"Batch commit step create_blob failed: status={error.status_code}")
                raise error from result
        return list(results)

    async def _read_old_content(self, path: str, ref: str) -> Any:
        """Current remote content for the report, or the default skeleton.

        Read failures only degrade the report; they never fail the batch.
        """
        try:
            remote = await self.store.read_file(path, ref=ref)
            return remote.content
        except GitHubNotFoundError:
            logger.info(f"{path} not found at {ref}, comparing against default content")
        except Exception as e:
            logger.warning(f"Could not read {path} for change report, using default: {e}")
        return default_content(path)
