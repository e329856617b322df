"""
GitHub repository contents operations.

Reads JSON files through the contents API and decodes them.
"""

import base64
import binascii
import json
import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

from application.services.github.api.client import GitHubAPIClient
from application.services.github.api.exceptions import ContentParseError
from application.services.github.models.types import RemoteFile

logger = logging.getLogger(__name__)


def decode_json_content(path: str, content_b64: str) -> Any:
    """Decode a base64 contents-API payload into a JSON value.

    Raises:
        ContentParseError: If the payload is not base64 UTF-8 JSON
    """
    try:
        text = base64.b64decode(content_b64).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as e:
        raise ContentParseError(path, f"invalid encoding: {e}") from e

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ContentParseError(path, f"invalid JSON: {e}") from e


class ContentsOperations:
    """Handles GitHub repository contents operations."""

    def __init__(self, client: GitHubAPIClient):
        """Initialize contents operations.

        Args:
            client: GitHub API client bound to the content repository
        """
        self.client = client

    async def read_file(self, path: str, ref: Optional[str] = None) -> RemoteFile:
        """Fetch a JSON file and its blob sha.

        Args:
            path: Repository-relative path (e.g. data/locations.json)
            ref: Branch, tag or commit sha

        Returns:
            RemoteFile with the parsed JSON content

        Raises:
            GitHubNotFoundError: If the file does not exist at ref
            ContentParseError: If the file is not valid JSON
            GitHubAPIError: On any other upstream failure
        """
        params: Dict[str, Any] = {}
        if ref:
            params["ref"] = ref

        endpoint = self.client.repo_path(f"contents/{quote(path)}")
        response = await self.client.get(endpoint, params=params)

        if isinstance(response, list) or response.get("type", "file") != "file":
            raise ContentParseError(path, "path is a directory")

        content = decode_json_content(path, response.get("content") or "")
        logger.debug(f"Fetched JSON from GitHub: {path} (sha: {response.get('sha')})")
        return RemoteFile(path=path, sha=response.get("sha"), content=content)
