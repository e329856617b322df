"""
Integration tests for content and actions routes.

Tests the complete HTTP request/response cycle including:
- Session authentication
- Request validation decorators
- Error translation for batch commits
- Response formatting
"""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from quart import Quart

from application.routes.actions import actions_bp
from application.routes.common.error_handlers import register_error_handlers
from application.routes.content import content_bp
from application.services.config_service import ConfigService, ContentRepoConfig
from application.services.content.batch_commit import BatchCommitService
from application.services.github.api.exceptions import GitHubAPIError
from application.services.github.models.types import WorkflowJobInfo, WorkflowRunInfo
from application.services.user_directory import UserDirectory
from tests.fixtures.content_store_fixtures import InMemoryContentStore

USER = {"id": "111", "username": "alice"}


@pytest.fixture(autouse=True)
def no_auth_bypass():
    with patch("common.config.config.DEV_BYPASS_AUTH", False):
        yield


@pytest.fixture
def store():
    return InMemoryContentStore(
        branch="main",
        files={"data/locations.json": [{"id": "hotel-a", "name": "Hotel A"}]},
    )


@pytest.fixture
def config_service():
    service = ConfigService()
    service._content_repo_config = ContentRepoConfig(
        owner="octo", repository="site", branch="main", data_dir="data"
    )
    return service


@pytest.fixture
def user_directory(tmp_path):
    path = tmp_path / "users.json"
    path.write_text(json.dumps([{"id": "111", "anonHash": "a1b2c3d4"}]), encoding="utf-8")
    return UserDirectory(path)


@pytest.fixture
def app(store, config_service, user_directory):
    """Create test application with the content store patched in."""
    app = Quart(__name__)
    app.secret_key = "test-secret"
    app.register_blueprint(content_bp)
    app.register_blueprint(actions_bp)
    register_error_handlers(app)

    committer = BatchCommitService(store=store, branch="main")
    with patch("application.routes.content.get_github_service", return_value=store), \
            patch("application.routes.content.get_batch_commit_service", return_value=committer), \
            patch("application.routes.content.get_config_service", return_value=config_service), \
            patch("application.routes.actions.get_config_service", return_value=config_service), \
            patch("application.routes.content.get_user_directory", return_value=user_directory):
        yield app


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


async def login(client, user=USER):
    async with client.session_transaction() as sess:
        sess["user"] = user


class TestAuthentication:
    """Test session authentication on protected routes."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "method,path",
        [
            ("GET", "/api/files"),
            ("GET", "/api/file/locations.json"),
            ("POST", "/api/batch"),
            ("GET", "/api/actions/latest"),
        ],
    )
    async def test_unauthenticated_requests_rejected(self, client, method, path):
        response = await client.open(path, method=method, json={"files": []})

        assert response.status_code == 401
        assert await response.get_json() == {"error": "Unauthorized"}

    @pytest.mark.asyncio
    async def test_dev_bypass(self, client):
        with patch("common.config.config.DEV_BYPASS_AUTH", True):
            response = await client.get("/api/files")
        assert response.status_code == 200


class TestListFiles:
    """Test the editable file listing."""

    @pytest.mark.asyncio
    async def test_list_files(self, client):
        await login(client)
        response = await client.get("/api/files")
        data = await response.get_json()

        assert response.status_code == 200
        assert data["files"][:3] == ["about.json", "attend.json", "more.json"]
        assert "repeating-events.json" in data["files"]


class TestGetFile:
    """Test single file reads."""

    @pytest.mark.asyncio
    async def test_existing_file(self, client, store):
        await login(client)
        response = await client.get("/api/file/locations.json")
        data = await response.get_json()

        remote = await store.read_file("data/locations.json", ref="main")
        assert response.status_code == 200
        assert data == {"sha": remote.sha, "content": [{"id": "hotel-a", "name": "Hotel A"}]}

    @pytest.mark.asyncio
    async def test_missing_list_file_returns_default(self, client):
        await login(client)
        response = await client.get("/api/file/times.json")

        assert response.status_code == 200
        assert await response.get_json() == {"sha": None, "content": [], "notFound": True}

    @pytest.mark.asyncio
    async def test_missing_document_returns_skeleton(self, client):
        await login(client)
        response = await client.get("/api/file/about.json")
        data = await response.get_json()

        assert data["content"] == {"title": "", "sections": []}
        assert data["notFound"] is True

    @pytest.mark.asyncio
    async def test_name_with_slash_rejected(self, client):
        await login(client)
        response = await client.get("/api/file/nested/secrets.json")

        assert response.status_code == 400
        assert (await response.get_json())["error"] == "Invalid file name"

    @pytest.mark.asyncio
    async def test_upstream_error_passthrough(self, client, store):
        await login(client)
        store.read_failures["data/live.json"] = GitHubAPIError(
            "rate limited", status_code=403, details={"message": "API rate limit exceeded"}
        )

        response = await client.get("/api/file/live.json")
        data = await response.get_json()

        assert response.status_code == 403
        assert data == {"error": "Failed to fetch file", "details": {"message": "API rate limit exceeded"}}


class TestBatchUpdate:
    """Test the batch commit endpoint."""

    @pytest.mark.asyncio
    async def test_batch_commit_success(self, client, store):
        await login(client)
        response = await client.post(
            "/api/batch",
            json={
                "files": [
                    {"path": "data/locations.json", "content": [{"id": "hotel-a"}, {"id": "hotel-b"}]},
                    {"path": "data/times.json", "content": [{"locationId": "hotel-b", "datetime": "2025-01-04T14:00"}]},
                ],
                "commitMessage": "Add Hotel B",
            },
        )
        data = await response.get_json()

        assert response.status_code == 200
        assert data["ok"] is True
        assert data["commitSha"] == store.tip("main")
        assert set(data["fileShas"]) == {"data/locations.json", "data/times.json"}

        message = store.commits[data["commitSha"]]["message"]
        assert message.startswith("Add Hotel B\n\nUser: a1b2c3d4\n\nChanges:\n")
        assert "alice" not in message

    @pytest.mark.asyncio
    async def test_unknown_user_gets_unknown_actor(self, client, store):
        await login(client, {"id": "999"})
        response = await client.post(
            "/api/batch", json={"files": [{"path": "data/live.json", "content": []}]}
        )
        data = await response.get_json()

        assert response.status_code == 200
        message = store.commits[data["commitSha"]]["message"]
        assert message.startswith("Update files via dashboard\n\nUser: unknown")

    @pytest.mark.asyncio
    async def test_empty_files_rejected(self, client, store):
        await login(client)
        old_tip = store.tip("main")

        response = await client.post("/api/batch", json={"files": []})

        assert response.status_code == 400
        assert (await response.get_json())["error"] == "No files provided"
        assert store.tip("main") == old_tip

    @pytest.mark.asyncio
    async def test_missing_files_field(self, client):
        await login(client)
        response = await client.post("/api/batch", json={"commitMessage": "x"})
        data = await response.get_json()

        assert response.status_code == 400
        assert data["error"] == "Validation failed"

    @pytest.mark.asyncio
    async def test_body_required(self, client):
        await login(client)
        response = await client.post("/api/batch", data="not json", headers={"Content-Type": "text/plain"})

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_duplicate_paths_rejected(self, client):
        await login(client)
        response = await client.post(
            "/api/batch",
            json={"files": [{"path": "data/a.json", "content": []}, {"path": "data/a.json", "content": [1]}]},
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_non_finite_number_rejected(self, client, store):
        await login(client)
        old_tip = store.tip("main")

        response = await client.post(
            "/api/batch",
            data='{"files": [{"path": "data/locations.json", "content": [{"id": "x", "lat": NaN}]}]}',
            headers={"Content-Type": "application/json"},
        )
        data = await response.get_json()

        assert response.status_code == 400
        assert "not JSON-serializable" in data["error"]
        assert store.tip("main") == old_tip
        assert store.calls == []

    @pytest.mark.asyncio
    async def test_conflict_returns_409(self, client, store):
        await login(client)
        store.before_update_ref = lambda: store.advance_branch("main", "data/live.json", [])

        response = await client.post(
            "/api/batch", json={"files": [{"path": "data/locations.json", "content": []}]}
        )

        assert response.status_code == 409
        assert await response.get_json() == {
            "error": "Branch was updated concurrently; reload and retry",
            "details": {"message": "Update is not a fast forward"},
        }
        assert store.files_at("main")["data/locations.json"] == [{"id": "hotel-a", "name": "Hotel A"}]

    @pytest.mark.asyncio
    async def test_upstream_failure_passthrough(self, client, store):
        await login(client)
        old_tip = store.tip("main")
        store.failures["create_tree"] = GitHubAPIError(
            "bad tree", status_code=422, details={"message": "tree.sha is invalid"}
        )

        response = await client.post(
            "/api/batch", json={"files": [{"path": "data/locations.json", "content": []}]}
        )
        data = await response.get_json()

        assert response.status_code == 422
        assert data == {"error": "Batch update failed", "details": {"message": "tree.sha is invalid"}}
        assert store.tip("main") == old_tip


class TestLatestActionsRun:
    """Test the workflow status endpoint."""

    def make_github_service(self, run, jobs):
        github_service = MagicMock()
        github_service.workflows.get_latest_run = AsyncMock(return_value=run)
        github_service.workflows.list_run_jobs = AsyncMock(return_value=jobs)
        return github_service

    @pytest.mark.asyncio
    async def test_latest_run(self, client):
        await login(client)
        run = WorkflowRunInfo.from_api(
            {"id": 42, "name": "pages", "status": "in_progress", "conclusion": None}
        )
        job = WorkflowJobInfo.from_api({"id": 7, "name": "build", "status": "in_progress"})
        github_service = self.make_github_service(run, [job])

        with patch("application.routes.actions.get_github_service", return_value=github_service):
            response = await client.get("/api/actions/latest")
        data = await response.get_json()

        assert response.status_code == 200
        assert data["run"]["id"] == 42
        assert data["run"]["status"] == "in_progress"
        assert data["jobs"] == [
            {
                "id": 7,
                "name": "build",
                "status": "in_progress",
                "conclusion": None,
                "started_at": None,
                "completed_at": None,
                "html_url": None,
            }
        ]
        github_service.workflows.get_latest_run.assert_awaited_once_with(branch="main")
        github_service.workflows.list_run_jobs.assert_awaited_once_with(42, per_page=20)

    @pytest.mark.asyncio
    async def test_no_runs(self, client):
        await login(client)
        github_service = self.make_github_service(None, [])

        with patch("application.routes.actions.get_github_service", return_value=github_service):
            response = await client.get("/api/actions/latest")

        assert await response.get_json() == {"run": None, "jobs": []}

    @pytest.mark.asyncio
    async def test_upstream_error(self, client):
        await login(client)
        github_service = MagicMock()
        github_service.workflows.get_latest_run = AsyncMock(
            side_effect=GitHubAPIError("unauthorized", status_code=401, details={"message": "Bad credentials"})
        )

        with patch("application.routes.actions.get_github_service", return_value=github_service):
            response = await client.get("/api/actions/latest")

        assert response.status_code == 401
        assert (await response.get_json())["error"] == "Failed to fetch actions status"


class TestErrorHandlers:
    """Test the application-wide handlers for errors no route translates."""

    @pytest.fixture
    def bare_app(self):
        app = Quart(__name__)
        register_error_handlers(app)

        @app.route("/value-error")
        async def raise_value_error():
            raise ValueError("bad input")

        @app.route("/permission-error")
        async def raise_permission_error():
            raise PermissionError()

        @app.route("/untranslated-upstream")
        async def raise_upstream():
            raise GitHubAPIError("boom", status_code=422, details={"message": "secret upstream body"})

        return app

    @pytest.mark.asyncio
    async def test_value_error_is_400(self, bare_app):
        response = await bare_app.test_client().get("/value-error")

        assert response.status_code == 400
        assert await response.get_json() == {"error": "bad input"}

    @pytest.mark.asyncio
    async def test_permission_error_is_403(self, bare_app):
        response = await bare_app.test_client().get("/permission-error")

        assert response.status_code == 403
        assert await response.get_json() == {"error": "Access denied"}

    @pytest.mark.asyncio
    async def test_upstream_error_outside_routes_is_generic_500(self, bare_app):
        response = await bare_app.test_client().get("/untranslated-upstream")

        assert response.status_code == 500
        assert await response.get_json() == {"error": "An unexpected error occurred"}
