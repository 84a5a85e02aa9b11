"""Task service - task operations that keep the local mirror in step.

Every remote mutation is followed by the equivalent change to the mirror
(patch-on-write), so later reads stay accurate without a full refetch. The
mirror is an optimization: failing to update it is logged, never raised.
"""

from __future__ import annotations

from gtask_cli.api.client import APIClient
from gtask_cli.api.tasks import TasksAPI
from gtask_cli.config import get_config_manager
from gtask_cli.models.exceptions import GTaskError, PersistenceError
from gtask_cli.models.task import (
    STATUS_COMPLETED,
    MirrorSnapshot,
    Task,
    TaskDraft,
    TaskUpdate,
)
from gtask_cli.services.mirror_store import MirrorStore
from gtask_cli.services.resolver import IdentityResolver
from gtask_cli.utils.logger import get_logger


class TaskService:
    """Service for task operations backed by the Tasks API and the mirror."""

    def __init__(
        self,
        tasks_api: TasksAPI,
        resolver: IdentityResolver,
        store: MirrorStore | None = None,
    ):
        """Initialize the task service.

        Args:
            tasks_api: Remote Tasks API
            resolver: Resolver sharing the same store
            store: Local mirror, or None when caching is disabled
        """
        self.tasks_api = tasks_api
        self.resolver = resolver
        self.store = store
        self._logger = get_logger()

    def close(self) -> None:
        """Release the underlying HTTP connection."""
        self.tasks_api.client.close()

    def _patch_mirror(self, operation: str, *args) -> None:
        """Apply a MirrorStore operation, logging instead of raising on failure."""
        if self.store is None:
            return
        try:
            getattr(self.store, operation)(*args)
        except PersistenceError as e:
            self._logger.warning("mirror update skipped: %s", e)

    def _list_name_after_write(self, task_list_id: str) -> str:
        """Title of the list a task was just written to, or "" if the lookup fails."""
        try:
            return self.resolver.get_task_list_name(task_list_id)
        except GTaskError as e:
            self._logger.warning("list title for %s unavailable: %s", task_list_id, e)
            return ""

    # Reads

    def list_all_tasks(self) -> list[Task]:
        """List incomplete tasks from every task list.

        A live, non-empty mirror is returned without touching the API.
        Otherwise everything is fetched and a fresh mirror is written.
        """
        if self.store is not None:
            snapshot = self.store.load()
            if snapshot is not None and snapshot.tasks:
                self._logger.debug("listing %d tasks from mirror", len(snapshot.tasks))
                return list(snapshot.tasks)

        self._logger.debug("mirror miss, fetching all task lists")
        task_lists = self.resolver.get_task_lists()
        all_tasks: list[Task] = []
        for task_list in task_lists:
            items = self.tasks_api.list_tasks(task_list.id)
            all_tasks.extend(
                Task.from_api(item, task_list.id, task_list.title) for item in items
            )

        snapshot = MirrorSnapshot(task_lists=task_lists, tasks=all_tasks)
        self._patch_mirror("save", snapshot)
        return all_tasks

    def list_tasks(self, task_list_id: str) -> list[Task]:
        """List incomplete tasks in one task list, straight from the API."""
        list_name = self.resolver.get_task_list_name(task_list_id)
        return [
            Task.from_api(item, task_list_id, list_name)
            for item in self.tasks_api.list_tasks(task_list_id)
        ]

    def get_task(self, task_list_id: str, task_id: str) -> Task:
        """Get a task by short or full ID within a task list."""
        return self.resolver.get_task(task_list_id, task_id)

    def find_task(self, task_id: str) -> Task:
        """Find a task by short or full ID in any task list."""
        return self.resolver.find_task(task_id)

    def resolve_list_id(self, name: str | None) -> str:
        return self.resolver.resolve_list_id(name)

    def get_task_list_name(self, task_list_id: str) -> str:
        return self.resolver.get_task_list_name(task_list_id)

    # Writes

    def create_task(self, task_list_id: str, draft: TaskDraft) -> Task:
        """Create a task and add it to the mirror."""
        item = self.tasks_api.insert_task(task_list_id, draft.to_api())
        created = Task.from_api(
            item, task_list_id, self._list_name_after_write(task_list_id)
        )
        if not created.is_completed:
            self._patch_mirror("add_task", created)
        return created

    def update_task(self, task_list_id: str, task_id: str, update: TaskUpdate) -> Task:
        """Update a task. Tasks that end up completed leave the mirror."""
        full_id = self.resolver.resolve_task_id(task_list_id, task_id)
        item = self.tasks_api.update_task(task_list_id, full_id, update.to_api())
        updated = Task.from_api(
            item, task_list_id, self._list_name_after_write(task_list_id)
        )

        if updated.is_completed:
            self._patch_mirror("remove_task", updated.id)
        else:
            self._patch_mirror("update_task", updated)
        return updated

    def complete_task(self, task_list_id: str, task_id: str) -> Task:
        """Mark a task as completed and drop it from the mirror."""
        full_id = self.resolver.resolve_task_id(task_list_id, task_id)
        item = self.tasks_api.update_task(
            task_list_id, full_id, {"status": STATUS_COMPLETED}
        )
        self._patch_mirror("remove_task", full_id)
        return Task.from_api(
            item, task_list_id, self._list_name_after_write(task_list_id)
        )

    def delete_task(self, task_list_id: str, task_id: str) -> str:
        """Delete a task and drop it from the mirror.

        Returns:
            The full ID of the deleted task
        """
        full_id = self.resolver.resolve_task_id(task_list_id, task_id)
        self.tasks_api.delete_task(task_list_id, full_id)
        self._patch_mirror("remove_task", full_id)
        return full_id

    def move_task(
        self,
        task_list_id: str,
        task_id: str,
        dest_task_list_id: str,
        draft: TaskDraft,
    ) -> Task:
        """Move a task to another list.

        The API cannot move tasks between lists, so the task is deleted from
        its list and recreated in the destination under a new ID.
        """
        self.delete_task(task_list_id, task_id)
        return self.create_task(dest_task_list_id, draft)


def get_task_service(profile: str = "default") -> TaskService:
    """Build a TaskService wired to one API client and one mirror store."""
    config_manager = get_config_manager(profile)
    config = config_manager.config

    tasks_api = TasksAPI(APIClient(config_manager))
    store = MirrorStore(ttl=config.cache.ttl) if config.cache.enabled else None
    resolver = IdentityResolver(tasks_api, store)
    return TaskService(tasks_api, resolver, store)
