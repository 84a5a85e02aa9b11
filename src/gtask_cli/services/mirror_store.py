"""Local, time-bounded mirror of task lists and tasks.

The mirror is one JSON document holding every cached task list and
incomplete task together with the time it was captured. It is always read
and written whole: task mutations load the document, change the in-memory
copy and save it back.
"""

from __future__ import annotations

import os
import tempfile
import threading
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from pathlib import Path

from platformdirs import user_cache_dir
from pydantic import ValidationError

from gtask_cli.config import APP_DIR_NAME
from gtask_cli.models.exceptions import PersistenceError
from gtask_cli.models.task import MirrorSnapshot, Task
from gtask_cli.utils.logger import get_logger

CACHE_DIR = Path(user_cache_dir(APP_DIR_NAME))
CACHE_FILE = CACHE_DIR / "cache.json"
CACHE_TTL = 300  # 5 minutes


def _utcnow() -> datetime:
    return datetime.now(UTC)


class MirrorStore:
    """File-backed snapshot store with a fixed staleness window."""

    def __init__(
        self,
        path: Path | None = None,
        *,
        ttl: int = CACHE_TTL,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.path = Path(path) if path is not None else CACHE_FILE
        self.ttl = timedelta(seconds=ttl)
        self._clock = clock
        self._lock = threading.Lock()
        self._logger = get_logger()

    def load(self) -> MirrorSnapshot | None:
        """Return the live snapshot, or None when missing, corrupt or expired.

        Callers cannot tell those cases apart; each one is a cache miss.
        """
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            self._logger.warning("mirror unreadable at %s: %s", self.path, e)
            return None

        try:
            snapshot = MirrorSnapshot.model_validate_json(raw)
        except ValidationError as e:
            self._logger.warning("mirror corrupt at %s: %s", self.path, e)
            return None

        cached_at = snapshot.cached_at
        if cached_at is None:
            return None
        if cached_at.tzinfo is None:
            cached_at = cached_at.replace(tzinfo=UTC)
        if self._clock() - cached_at > self.ttl:
            self._logger.debug("mirror expired (cached at %s)", snapshot.cached_at)
            return None
        return snapshot

    def save(self, snapshot: MirrorSnapshot) -> None:
        """Stamp the snapshot with the current time and persist it atomically.

        The document is written to a sibling temp file and renamed over the
        canonical path, so readers see either the old or the new document.

        Raises:
            PersistenceError: If the document cannot be written.
        """
        snapshot.cached_at = self._clock()
        payload = snapshot.model_dump_json(indent=2)

        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True, mode=0o700)
            # mkstemp creates the file with 0600 permissions
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=".cache-", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_name, self.path)
        except OSError as e:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            raise PersistenceError(f"Failed to write mirror {self.path}: {e}") from e

    def add_task(self, task: Task) -> None:
        """Append a task to the mirror. No-op if there is no live mirror."""
        with self._lock:
            snapshot = self.load()
            if snapshot is None:
                return
            snapshot.tasks.append(task)
            self.save(snapshot)

    def update_task(self, task: Task) -> None:
        """Replace the cached task with the same ID. No-op if absent."""
        with self._lock:
            snapshot = self.load()
            if snapshot is None:
                return
            for i, cached in enumerate(snapshot.tasks):
                if cached.id == task.id:
                    snapshot.tasks[i] = task
                    self.save(snapshot)
                    return

    def remove_task(self, task_id: str) -> None:
        """Drop the cached task with this ID. No-op if absent."""
        with self._lock:
            snapshot = self.load()
            if snapshot is None:
                return
            remaining = [t for t in snapshot.tasks if t.id != task_id]
            if len(remaining) == len(snapshot.tasks):
                return
            snapshot.tasks = remaining
            self.save(snapshot)

    def invalidate(self) -> None:
        """Delete the mirror document. A missing document counts as success.

        Raises:
            PersistenceError: If the document exists but cannot be removed.
        """
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            raise PersistenceError(f"Failed to remove mirror {self.path}: {e}") from e
