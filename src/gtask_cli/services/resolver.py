"""Identity resolution for task lists and short task IDs.

Lookups consult the local mirror first and fall back to the Tasks API.
Within one list a short ID must be unambiguous; across lists the first
match wins.
"""

from __future__ import annotations

from gtask_cli.api.tasks import TasksAPI
from gtask_cli.models.exceptions import (
    AmbiguousIdError,
    NotFoundError,
    TransportError,
)
from gtask_cli.models.task import DEFAULT_TASK_LIST, MirrorSnapshot, Task, TaskList
from gtask_cli.services.mirror_store import MirrorStore
from gtask_cli.utils.id_utils import matches_prefix
from gtask_cli.utils.logger import get_logger


class IdentityResolver:
    """Resolves list names and short task IDs to canonical IDs."""

    def __init__(self, tasks_api: TasksAPI, store: MirrorStore | None = None):
        """Initialize the resolver.

        Args:
            tasks_api: Remote Tasks API
            store: Local mirror, or None when caching is disabled
        """
        self.tasks_api = tasks_api
        self.store = store
        self._logger = get_logger()

    def _load_mirror(self) -> MirrorSnapshot | None:
        if self.store is None:
            return None
        return self.store.load()

    def get_task_lists(self) -> list[TaskList]:
        """Return all task lists, from the mirror when it has any."""
        snapshot = self._load_mirror()
        if snapshot is not None and snapshot.task_lists:
            self._logger.debug("task lists served from mirror")
            return list(snapshot.task_lists)

        return [TaskList.from_api(item) for item in self.tasks_api.list_task_lists()]

    def get_task_list_name(self, task_list_id: str) -> str:
        """Return the display title of a task list."""
        snapshot = self._load_mirror()
        if snapshot is not None:
            for task_list in snapshot.task_lists:
                if task_list.id == task_list_id:
                    return task_list.title

        if task_list_id == DEFAULT_TASK_LIST:
            try:
                return self.tasks_api.get_task_list(DEFAULT_TASK_LIST).get(
                    "title", DEFAULT_TASK_LIST
                )
            except (NotFoundError, TransportError) as e:
                self._logger.debug("default list title unavailable: %s", e)
                return DEFAULT_TASK_LIST

        return self.tasks_api.get_task_list(task_list_id).get("title", "")

    def resolve_list_id(self, name: str | None) -> str:
        """Resolve a task list title to its ID.

        An empty name or the ``@default`` sentinel is returned as the
        sentinel without any lookup. Titles must match exactly.

        Raises:
            NotFoundError: If no list has this title
        """
        if not name or name == DEFAULT_TASK_LIST:
            return DEFAULT_TASK_LIST

        for task_list in self.get_task_lists():
            if task_list.title == name:
                return task_list.id

        raise NotFoundError(f"Task list '{name}' not found")

    def resolve_task_id(self, task_list_id: str, short_id: str) -> str:
        """Resolve a short or full task ID within one task list.

        Tries in order: mirror prefix scan, direct fetch by the given ID,
        prefix search over every task in the list (completed and hidden
        included).

        Raises:
            NotFoundError: If no task in the list matches
            AmbiguousIdError: If the prefix search finds several tasks
        """
        snapshot = self._load_mirror()
        if snapshot is not None:
            for task in snapshot.tasks:
                # First hit wins; the mirror scan does not check ambiguity
                if task.task_list_id == task_list_id and matches_prefix(task.id, short_id):
                    self._logger.debug("task id %s resolved from mirror", short_id)
                    return task.id

        try:
            self.tasks_api.get_task(task_list_id, short_id)
            return short_id
        except NotFoundError:
            pass
        except TransportError as e:
            # The API answers 400 for strings that are not valid task IDs
            if e.status_code != 400:
                raise

        items = self.tasks_api.list_tasks(
            task_list_id, show_completed=True, show_hidden=True
        )
        matches = [item["id"] for item in items if matches_prefix(item["id"], short_id)]

        if not matches:
            raise NotFoundError(f"Task '{short_id}' not found")
        if len(matches) > 1:
            raise AmbiguousIdError(short_id, matches, scope=task_list_id)
        return matches[0]

    def get_task(self, task_list_id: str, short_id: str) -> Task:
        """Resolve a task ID within a list and fetch the task."""
        full_id = self.resolve_task_id(task_list_id, short_id)
        item = self.tasks_api.get_task(task_list_id, full_id)
        return Task.from_api(item, task_list_id, self.get_task_list_name(task_list_id))

    def find_task(self, short_id: str) -> Task:
        """Find a task by short or full ID without knowing its list.

        Lists are searched in enumeration order and the first match wins,
        even if a later list holds another task with the same prefix.

        Raises:
            NotFoundError: If no list contains a matching task
        """
        snapshot = self._load_mirror()
        if snapshot is not None:
            for task in snapshot.tasks:
                if matches_prefix(task.id, short_id):
                    self._logger.debug("task %s found in mirror", short_id)
                    return task

        for task_list in self.get_task_lists():
            try:
                return self.get_task(task_list.id, short_id)
            except NotFoundError:
                continue

        raise NotFoundError(f"Task '{short_id}' not found")
