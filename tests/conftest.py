"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from real filesystem/API state.
"""

from __future__ import annotations

import copy
import logging
from datetime import UTC, datetime, timedelta
from logging.handlers import RotatingFileHandler
from unittest.mock import MagicMock, patch

import pytest

from gtask_cli.models.exceptions import NotFoundError
from gtask_cli.models.task import DEFAULT_TASK_LIST
from gtask_cli.services.mirror_store import MirrorStore
from gtask_cli.services.resolver import IdentityResolver
from gtask_cli.services.task_service import TaskService

# ---------------------------------------------------------------------------
# Logging / config isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_logger(tmp_path):
    """Send the application log to tmp_path and reset the singleton."""
    import gtask_cli.utils.logger as logger_mod

    def _reset():
        app_logger = logging.getLogger(logger_mod.LOGGER_NAME)
        for handler in list(app_logger.handlers):
            # Leave pytest's own capture handlers in place
            if isinstance(handler, RotatingFileHandler):
                handler.close()
                app_logger.removeHandler(handler)
        logger_mod._logger = None

    _reset()
    with patch("gtask_cli.utils.logger.user_log_dir", return_value=str(tmp_path / "logs")):
        yield
    _reset()


@pytest.fixture()
def tmp_config(tmp_path):
    """Provide a real ConfigManager backed by a temporary directory."""
    import gtask_cli.config as config_mod

    config_mod._config_manager = None
    with patch("gtask_cli.config.user_config_dir", return_value=str(tmp_path / "config")):
        with patch("gtask_cli.config.user_data_dir", return_value=str(tmp_path / "data")):
            yield config_mod.get_config_manager()
    config_mod._config_manager = None


# ---------------------------------------------------------------------------
# Clock and store
# ---------------------------------------------------------------------------


class FakeClock:
    """Manually advanced UTC clock."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2024, 3, 1, 9, 0, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def cache_path(tmp_path):
    return tmp_path / "cache" / "cache.json"


@pytest.fixture()
def store(cache_path, clock):
    return MirrorStore(cache_path, clock=clock)


@pytest.fixture(autouse=True)
def isolated_cache(cache_path):
    """Point the default mirror location at tmp_path."""
    with patch("gtask_cli.services.mirror_store.CACHE_FILE", cache_path):
        yield


# ---------------------------------------------------------------------------
# Remote API double
# ---------------------------------------------------------------------------


class FakeTasksAPI:
    """In-memory stand-in for TasksAPI that records every call."""

    def __init__(self):
        self.task_lists: list[dict] = [
            {"id": "L1", "title": "My Tasks"},
            {"id": "L2", "title": "Work"},
        ]
        self.tasks: dict[str, list[dict]] = {
            "L1": [
                {"id": "abcdef1234567890", "title": "Buy milk", "status": "needsAction"},
            ],
            "L2": [
                {
                    "id": "ffee001122334455",
                    "title": "Write report",
                    "notes": "Q1 numbers",
                    "due": "2024-03-05T00:00:00.000Z",
                    "status": "needsAction",
                },
            ],
        }
        self.calls: list[tuple] = []
        self.client = MagicMock()
        self._counter = 0

    def _key(self, task_list_id: str) -> str:
        if task_list_id == DEFAULT_TASK_LIST and self.task_lists:
            return self.task_lists[0]["id"]
        return task_list_id

    def _find(self, task_list_id: str, task_id: str) -> dict:
        for item in self.tasks.get(self._key(task_list_id), []):
            if item["id"] == task_id:
                return item
        raise NotFoundError(f"task {task_id} not found")

    def calls_to(self, name: str) -> list[tuple]:
        return [c for c in self.calls if c[0] == name]

    def list_task_lists(self) -> list[dict]:
        self.calls.append(("list_task_lists",))
        return copy.deepcopy(self.task_lists)

    def get_task_list(self, task_list_id: str) -> dict:
        self.calls.append(("get_task_list", task_list_id))
        key = self._key(task_list_id)
        for task_list in self.task_lists:
            if task_list["id"] == key:
                return dict(task_list)
        raise NotFoundError(f"list {task_list_id} not found")

    def list_tasks(self, task_list_id, *, show_completed=False, show_hidden=False):
        self.calls.append(("list_tasks", task_list_id, show_completed, show_hidden))
        items = self.tasks.get(self._key(task_list_id), [])
        if not show_completed:
            items = [i for i in items if i.get("status") != "completed"]
        return copy.deepcopy(items)

    def get_task(self, task_list_id: str, task_id: str) -> dict:
        self.calls.append(("get_task", task_list_id, task_id))
        return copy.deepcopy(self._find(task_list_id, task_id))

    def insert_task(self, task_list_id: str, body: dict) -> dict:
        self.calls.append(("insert_task", task_list_id, body))
        self._counter += 1
        item = {"id": f"new{self._counter:013d}", "status": "needsAction", **body}
        self.tasks.setdefault(self._key(task_list_id), []).append(item)
        return copy.deepcopy(item)

    def update_task(self, task_list_id: str, task_id: str, body: dict | None = None) -> dict:
        self.calls.append(("update_task", task_list_id, task_id, body))
        item = self._find(task_list_id, task_id)
        for key, value in (body or {}).items():
            if value is None:
                item.pop(key, None)
            else:
                item[key] = value
        return copy.deepcopy(item)

    def delete_task(self, task_list_id: str, task_id: str) -> None:
        self.calls.append(("delete_task", task_list_id, task_id))
        item = self._find(task_list_id, task_id)
        self.tasks[self._key(task_list_id)].remove(item)


@pytest.fixture()
def fake_api():
    return FakeTasksAPI()


@pytest.fixture()
def resolver(fake_api, store):
    return IdentityResolver(fake_api, store)


@pytest.fixture()
def task_service(fake_api, resolver, store):
    return TaskService(fake_api, resolver, store)


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

_COMMAND_MODULES = (
    "list_command",
    "add_command",
    "done_command",
    "edit_command",
    "delete_command",
)


@pytest.fixture()
def logged_in(tmp_config):
    """Store a token so commands pass the auth check."""
    tmp_config.save_credentials("test_token")
    return tmp_config


@pytest.fixture()
def cli_service(task_service, logged_in):
    """Make every command use the in-memory task service."""
    patches = [
        patch(f"gtask_cli.commands.{name}.get_task_service", return_value=task_service)
        for name in _COMMAND_MODULES
    ]
    for p in patches:
        p.start()
    yield task_service
    for p in patches:
        p.stop()
