"""Task data models."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field

# Reserved task list ID meaning "the user's default list"
DEFAULT_TASK_LIST = "@default"

STATUS_NEEDS_ACTION = "needsAction"
STATUS_COMPLETED = "completed"

TaskStatus = Literal["needsAction", "completed"]

# Due dates are whole days; the API wants them pinned to midnight UTC
_DUE_SUFFIX = "T00:00:00.000Z"


def format_due_date(due: date | str | None) -> Optional[str]:
    """Convert a date (or YYYY-MM-DD string) to the API timestamp format."""
    if not due:
        return None
    if isinstance(due, date):
        due = due.isoformat()
    return due + _DUE_SUFFIX


def parse_due_date(api_due: str | None) -> Optional[date]:
    """Extract the date part from an API due timestamp."""
    if not api_due or len(api_due) < 10:
        return None
    return date.fromisoformat(api_due[:10])


class TaskList(BaseModel):
    """Task list model."""

    id: str
    title: str

    @classmethod
    def from_api(cls, item: dict[str, Any]) -> TaskList:
        return cls(id=item["id"], title=item.get("title", ""))


class Task(BaseModel):
    """Task model, denormalized with the title of the list it belongs to."""

    id: str
    title: str = ""
    notes: str = ""
    due: Optional[date] = None
    status: TaskStatus = STATUS_NEEDS_ACTION
    completed: Optional[str] = None
    task_list_id: str
    task_list_name: str = ""

    @property
    def is_completed(self) -> bool:
        return self.status == STATUS_COMPLETED

    @classmethod
    def from_api(
        cls, item: dict[str, Any], task_list_id: str, task_list_name: str
    ) -> Task:
        """Build a Task from a Tasks API resource."""
        return cls(
            id=item["id"],
            title=item.get("title", ""),
            notes=item.get("notes", ""),
            due=parse_due_date(item.get("due")),
            status=item.get("status", STATUS_NEEDS_ACTION),
            completed=item.get("completed"),
            task_list_id=task_list_id,
            task_list_name=task_list_name,
        )


class TaskDraft(BaseModel):
    """Fields for a task that does not exist yet."""

    title: str
    notes: str = ""
    due: Optional[date] = None
    status: TaskStatus = STATUS_NEEDS_ACTION

    def to_api(self) -> dict[str, Any]:
        body: dict[str, Any] = {"title": self.title}
        if self.notes:
            body["notes"] = self.notes
        if self.due:
            body["due"] = format_due_date(self.due)
        if self.status == STATUS_COMPLETED:
            body["status"] = STATUS_COMPLETED
        return body


class TaskUpdate(BaseModel):
    """Partial update for an existing task.

    Only fields that were explicitly set are sent, so ``TaskUpdate(due=None)``
    clears the due date while ``TaskUpdate()`` leaves it untouched.
    """

    title: Optional[str] = None
    notes: Optional[str] = None
    due: Optional[date] = None
    status: Optional[TaskStatus] = None

    def to_api(self) -> dict[str, Any]:
        body = self.model_dump(exclude_unset=True)
        if "due" in body:
            body["due"] = format_due_date(body["due"])
        if body.get("status") == STATUS_NEEDS_ACTION:
            # Reopening requires dropping the completion timestamp
            body["completed"] = None
        return body


class MirrorSnapshot(BaseModel):
    """Everything the local mirror holds, persisted as a single document."""

    task_lists: list[TaskList] = Field(default_factory=list)
    tasks: list[Task] = Field(default_factory=list)
    cached_at: Optional[datetime] = None
