"""
Session-scoped edit buffer.

Holds the working copy of every data file a session has touched, tracks
which ones are dirty, and hands dirty files to the batch committer. Files are
fetched lazily on first use; a file missing from the repository starts as its
default skeleton.

Cascading edits (removing or renaming a location, changing repeating
schedules) keep references consistent inside the buffer only. The repository
itself enforces nothing.
"""

import asyncio
import copy
import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Dict, Iterable, List, Optional

from application.services.content.batch_commit import (
    BatchCommitService,
    CommitFile,
    CommitRequest,
    CommitResult,
)
from application.services.content.locations import location_id as generate_location_id
from application.services.content.registry import (
    LIVE_FILE,
    LOCATIONS_FILE,
    REPEATING_EVENTS_FILE,
    TIMES_FILE,
    default_content,
)
from application.services.content.schedule import (
    expand_schedule,
    schedule_key,
    time_key,
    unique_times,
)
from application.services.github.api.exceptions import GitHubNotFoundError

logger = logging.getLogger(__name__)


@dataclass
class TrackedFile:
    """Working copy of one repository file.

    `revision_marker` is the blob sha last seen remotely (None when the file
    does not exist yet). `version` counts local mutations.
    """

    path: str
    content: Any
    revision_marker: Optional[str] = None
    dirty: bool = False
    version: int = 0


class EditBuffer:
    """Per-session map of path -> TrackedFile."""

    def __init__(
        self,
        store,
        committer: BatchCommitService,
        path_for: Callable[[str], str] = lambda name: f"data/{name}",
        ref: Optional[str] = None,
    ):
        """
        Args:
            store: Object with `async read_file(path, ref)` (GitHubService)
            committer: Batch committer used by push()
            path_for: Maps a file name (locations.json) to its repository path
            ref: Ref to read from; defaults to the committer's branch
        """
        self.store = store
        self.committer = committer
        self.path_for = path_for
        self.ref = ref or committer.branch
        self._files: Dict[str, TrackedFile] = {}
        self._load_lock = asyncio.Lock()

    # ------------------------------------------------------------------
    # Access

    async def get(self, name: str) -> TrackedFile:
        """Return the tracked file, fetching it on first reference."""
        path = self.path_for(name)
        tracked = self._files.get(path)
        if tracked is not None:
            return tracked

        async with self._load_lock:
            # Another coroutine may have loaded it while we waited
            tracked = self._files.get(path)
            if tracked is None:
                loaded = await self._load(path)
                # set_content may have created the entry during the fetch; a local edit wins
                tracked = self._files.setdefault(path, loaded)
        return tracked

    async def ensure_loaded(self, names: Iterable[str]) -> None:
        for name in names:
            await self.get(name)

    def peek(self, name: str) -> Optional[TrackedFile]:
        """Tracked file if already loaded, without fetching."""
        return self._files.get(self.path_for(name))

    async def _load(self, path: str) -> TrackedFile:
        try:
            remote = await self.store.read_file(path, ref=self.ref)
        except GitHubNotFoundError:
            logger.info(f"{path} not found remotely, starting from default content")
            return TrackedFile(path=path, content=default_content(path))
        return TrackedFile(path=path, content=remote.content, revision_marker=remote.sha)

    # ------------------------------------------------------------------
    # Mutation

    def set_content(self, name: str, content: Any) -> TrackedFile:
        """Replace a file's content and mark it dirty."""
        path = self.path_for(name)
        tracked = self._files.get(path)
        if tracked is None:
            tracked = TrackedFile(path=path, content=content)
            self._files[path] = tracked
        tracked.content = content
        tracked.dirty = True
        tracked.version += 1
        return tracked

    def dirty_files(self) -> List[TrackedFile]:
        return [tracked for tracked in self._files.values() if tracked.dirty]

    def mark_clean(
        self,
        paths: Iterable[str],
        file_shas: Optional[Dict[str, str]] = None,
        versions: Optional[Dict[str, int]] = None,
    ) -> None:
        """Clear dirty flags after a successful commit.

        A file edited again after `versions` was captured stays dirty, but
        still takes its new revision marker.
        """
        file_shas = file_shas or {}
        for path in paths:
            tracked = self._files.get(path)
            if tracked is None:
                continue
            if path in file_shas:
                tracked.revision_marker = file_shas[path]
            if versions is None or versions.get(path) == tracked.version:
                tracked.dirty = False

    async def push(self, commit_message: Optional[str], actor_tag: str) -> Optional[CommitResult]:
        """Commit all dirty files in one batch.

        Returns None when nothing is dirty. On failure the exception propagates
        and dirty state is left untouched so the push can be retried.
        """
        dirty = self.dirty_files()
        if not dirty:
            logger.info("No changes to push")
            return None

        versions = {tracked.path: tracked.version for tracked in dirty}
        request = CommitRequest(
            files=[CommitFile(path=tracked.path, content=copy.deepcopy(tracked.content)) for tracked in dirty],
            commit_message=commit_message,
        )
        result = await self.committer.commit_batch(request, actor_tag)
        self.mark_clean(versions.keys(), file_shas=result.file_shas, versions=versions)
        return result

    # ------------------------------------------------------------------
    # Cascades

    async def remove_location(self, location_id: str) -> None:
        """Remove a location and every time, schedule and live entry that references it."""
        await self.ensure_loaded([LOCATIONS_FILE, TIMES_FILE, REPEATING_EVENTS_FILE, LIVE_FILE])

        self._filter_list(LOCATIONS_FILE, lambda entry: entry.get("id") != location_id)
        for name in (TIMES_FILE, REPEATING_EVENTS_FILE, LIVE_FILE):
            self._filter_list(name, lambda entry: entry.get("locationId") != location_id)
        logger.debug(f"Removed location {location_id} and its dependent entries")

    async def rename_location(self, old_id: str, new_id: str) -> None:
        """Change a location id and repoint every reference to it."""
        if old_id == new_id:
            return
        await self.ensure_loaded([LOCATIONS_FILE, TIMES_FILE, REPEATING_EVENTS_FILE, LIVE_FILE])

        self._map_list(LOCATIONS_FILE, "id", old_id, new_id)
        for name in (TIMES_FILE, REPEATING_EVENTS_FILE, LIVE_FILE):
            self._map_list(name, "locationId", old_id, new_id)

    async def update_location(self, current_id: str, **fields: Any) -> str:
        """Apply field changes to a location and return its (possibly new) id.

        Changing `location` or `venue` regenerates the id from the new names
        and repoints every reference to it. Blank names keep the current id.

        Raises:
            ValueError: If no location has `current_id`
        """
        await self.ensure_loaded([LOCATIONS_FILE, TIMES_FILE, REPEATING_EVENTS_FILE, LIVE_FILE])
        entries = list(self.peek(LOCATIONS_FILE).content or [])
        index = next(
            (i for i, entry in enumerate(entries) if isinstance(entry, dict) and entry.get("id") == current_id),
            None,
        )
        if index is None:
            raise ValueError(f"Unknown location: {current_id}")

        updated = {**entries[index], **fields}
        new_id = current_id
        if "location" in fields or "venue" in fields:
            others = [entry.get("id") for i, entry in enumerate(entries) if i != index and isinstance(entry, dict)]
            new_id = generate_location_id(updated.get("location"), updated.get("venue"), others) or current_id
        updated["id"] = new_id
        entries[index] = updated

        self.set_content(LOCATIONS_FILE, entries)
        await self.rename_location(current_id, new_id)
        return new_id

    async def set_repeating_events(self, events: List[Dict[str, Any]], today: Optional[date] = None) -> None:
        """Replace repeating events and sync their four-week instances into times."""
        previous = list((await self.get(REPEATING_EVENTS_FILE)).content or [])
        times_file = await self.get(TIMES_FILE)
        times = list(times_file.content or [])

        next_keys = {schedule_key(event) for event in events if isinstance(event, dict)}
        previous_keys = {schedule_key(event) for event in previous if isinstance(event, dict)}
        removed = [e for e in previous if isinstance(e, dict) and schedule_key(e) not in next_keys]
        added = [e for e in events if isinstance(e, dict) and schedule_key(e) not in previous_keys]

        self.set_content(REPEATING_EVENTS_FILE, events)

        updated = times
        if removed:
            stale = {time_key(t) for event in removed for t in expand_schedule(event, today)}
            updated = [t for t in updated if not isinstance(t, dict) or time_key(t) not in stale]
        if added:
            additions = [t for event in added for t in expand_schedule(event, today)]
            updated = unique_times(updated + additions)

        if updated != times:
            self.set_content(TIMES_FILE, updated)

    # Entries that are not objects are kept as they are; cascades only touch objects

    def _filter_list(self, name: str, keep: Callable[[Dict[str, Any]], bool]) -> None:
        tracked = self.peek(name)
        entries = list(tracked.content or []) if tracked else []
        kept = [entry for entry in entries if not isinstance(entry, dict) or keep(entry)]
        if len(kept) != len(entries):
            self.set_content(name, kept)

    def _map_list(self, name: str, key: str, old: str, new: str) -> None:
        tracked = self.peek(name)
        entries = list(tracked.content or []) if tracked else []

        def matches(entry: Any) -> bool:
            return isinstance(entry, dict) and entry.get(key) == old

        if not any(matches(entry) for entry in entries):
            return
        self.set_content(name, [{**entry, key: new} if matches(entry) else entry for entry in entries])
