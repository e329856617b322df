"""
GitHub API client for making authenticated requests.
Uses a personal access token with the GitHub REST v3 API.
"""

import logging
from typing import Optional, Dict, Any

import httpx

from application.services.github.api.exceptions import (
    GitHubAPIError,
    GitHubNotFoundError,
)
from common.config.config import GITHUB_API_URL, GITHUB_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)


class GitHubAPIClient:
    """Base client for GitHub API interactions."""

    API_VERSION = "2022-11-28"

    def __init__(
        self,
        token: Optional[str] = None,
        owner: Optional[str] = None,
        repository: Optional[str] = None,
        base_url: str = GITHUB_API_URL,
        timeout: float = GITHUB_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize GitHub API client.

        Args:
            token: GitHub API token
            owner: Default repository owner
            repository: Default repository name
            base_url: API root, overridable for GitHub Enterprise
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.token = token
        self.owner = owner
        self.repository = repository
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

        if not token:
            logger.warning("GitHub API client initialized without a token - requests may fail")

    def repo_path(self, suffix: str, owner: Optional[str] = None, repository: Optional[str] = None) -> str:
        """Build a `repos/{owner}/{repo}/...` API path."""
        owner = owner or self.owner
        repository = repository or self.repository
        return f"repos/{owner}/{repository}/{suffix.lstrip('/')}"

    def _get_headers(self) -> Dict[str, str]:
        """Get headers for GitHub API requests."""
        return {
            "Authorization": f"Bearer {self.token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": self.API_VERSION,
            "Content-Type": "application/json",
        }

    async def request(
        self,
        method: str,
        path: str,
        data: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Make a GitHub API request.

        Args:
            method: HTTP method (GET, POST, PATCH)
            path: API path (without base URL)
            data: Request body data
            params: Query parameters

        Returns:
            Parsed JSON response (empty dict for empty bodies)

        Raises:
            GitHubNotFoundError: On 404
            GitHubAPIError: On any other non-success status or transport failure
        """
        url = f"{self.base_url}/{path}"
        headers = self._get_headers()

        try:
            timeout_config = httpx.Timeout(self.timeout, connect=min(self.timeout, 10.0))
            response = await self._execute_http_request(
                method, url, headers, data, params, timeout_config
            )
        except httpx.RequestError as e:
            error_msg = f"GitHub API request error: {e}"
            logger.error(error_msg)
            raise GitHubAPIError(error_msg, status_code=502) from e

        return self._process_response(response, method, url)

    async def _execute_http_request(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        data: Optional[Dict[str, Any]],
        params: Optional[Dict[str, Any]],
        timeout_config: httpx.Timeout,
    ) -> httpx.Response:
        """Execute HTTP request with method routing.

        Raises:
            ValueError: If HTTP method is unsupported
        """
        method_upper = method.upper()

        async with httpx.AsyncClient(
            timeout=timeout_config, trust_env=False, transport=self._transport
        ) as client:
            if method_upper == "GET":
                return await client.get(url, headers=headers, params=params)
            elif method_upper == "POST":
                return await client.post(url, json=data, headers=headers, params=params)
            elif method_upper == "PATCH":
                return await client.patch(url, json=data, headers=headers, params=params)
            else:
                raise ValueError(f"Unsupported HTTP method: {method}")

    def _process_response(
        self, response: httpx.Response, method: str, url: str
    ) -> Dict[str, Any]:
        """Process HTTP response and extract data.

        Raises:
            GitHubNotFoundError: If the status is 404
            GitHubAPIError: If the status indicates any other failure
        """
        if response.status_code in (200, 201, 204):
            logger.debug(
                f"GitHub API {method} {url} successful (status: {response.status_code})"
            )
            if response.content:
                try:
                    return response.json()
                except ValueError:
                    return {}
            return {}

        details = self._error_details(response)
        error_msg = f"GitHub API {method} {url} failed (status {response.status_code})"

        if response.status_code == 404:
            logger.debug(error_msg)
            raise GitHubNotFoundError(error_msg, status_code=404, details=details)

        logger.error(f"{error_msg}: {response.text}")
        raise GitHubAPIError(error_msg, status_code=response.status_code, details=details)

    @staticmethod
    def _error_details(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return {"message": response.text}

    async def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Make a GET request."""
        return await self.request("GET", path, params=params)

    async def post(self, path: str, data: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Make a POST request."""
        return await self.request("POST", path, data=data)

    async def patch(self, path: str, data: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Make a PATCH request."""
        return await self.request("PATCH", path, data=data)
