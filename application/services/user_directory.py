"""
Read-only view of the authorized users file.

The file is managed elsewhere (admin tooling); this service only answers
whether a user is allowed, whether they are an admin, and which anonymized
actor tag to record for them in commit messages.

Accepted formats: a JSON list of ids (all editors) or a list of objects
`{id, role, username?, anonHash?}`.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Union

from common.config.config import USERS_FILE

logger = logging.getLogger(__name__)

UNKNOWN_ACTOR = "unknown"


@dataclass
class UserRecord:
    id: str
    role: str = "editor"
    username: Optional[str] = None
    anon_hash: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


def _normalize(raw: Union[str, int, Dict]) -> UserRecord:
    if not isinstance(raw, dict):
        return UserRecord(id=str(raw))
    return UserRecord(
        id=str(raw.get("id")),
        role="admin" if raw.get("role") == "admin" else "editor",
        username=str(raw["username"]) if raw.get("username") else None,
        anon_hash=str(raw["anonHash"]) if raw.get("anonHash") else None,
    )


class UserDirectory:
    """Lookups over the users file. The file is re-read on every call."""

    def __init__(self, users_file: Union[str, Path] = USERS_FILE):
        self.users_file = Path(users_file)

    def load_users(self) -> List[UserRecord]:
        if not self.users_file.exists():
            return []
        try:
            parsed = json.loads(self.users_file.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to read {self.users_file}: {e}")
            return []
        if not isinstance(parsed, list):
            logger.error(f"{self.users_file} must contain a JSON list")
            return []
        return [_normalize(raw) for raw in parsed]

    def get_user(self, user_id: Optional[str]) -> Optional[UserRecord]:
        if user_id is None:
            return None
        user_id = str(user_id)
        return next((user for user in self.load_users() if user.id == user_id), None)

    def is_allowed(self, user_id: Optional[str]) -> bool:
        return self.get_user(user_id) is not None

    def actor_tag_for(self, user_id: Optional[str]) -> str:
        """Anonymized tag for commit messages; never the username."""
        user = self.get_user(user_id)
        if user is None or not user.anon_hash:
            return UNKNOWN_ACTOR
        return user.anon_hash


def get_user_directory() -> UserDirectory:
    """UserDirectory for the configured USERS_FILE."""
    return UserDirectory(USERS_FILE)
