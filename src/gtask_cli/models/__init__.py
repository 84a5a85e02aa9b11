"""Data models for gtask-cli."""

from .exceptions import (
    AmbiguousIdError,
    GTaskError,
    NotFoundError,
    PersistenceError,
    TransportError,
)
from .task import (
    DEFAULT_TASK_LIST,
    STATUS_COMPLETED,
    STATUS_NEEDS_ACTION,
    MirrorSnapshot,
    Task,
    TaskDraft,
    TaskList,
    TaskUpdate,
    format_due_date,
    parse_due_date,
)

__all__ = [
    "DEFAULT_TASK_LIST",
    "STATUS_COMPLETED",
    "STATUS_NEEDS_ACTION",
    "AmbiguousIdError",
    "GTaskError",
    "MirrorSnapshot",
    "NotFoundError",
    "PersistenceError",
    "Task",
    "TaskDraft",
    "TaskList",
    "TaskUpdate",
    "TransportError",
    "format_due_date",
    "parse_due_date",
]
