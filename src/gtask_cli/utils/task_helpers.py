"""Task helper utilities shared by commands."""

from datetime import date

from gtask_cli.commands.decorators import AppError
from gtask_cli.models.task import Task
from gtask_cli.services.task_service import TaskService
from gtask_cli.utils import exit_codes


def resolve_task(task_service: TaskService, task_id: str, tasklist: str | None) -> Task:
    """Locate a task from command-line input.

    With a task list name the ID is resolved strictly inside that list;
    without one every list is searched and the first match wins.

    Args:
        task_service: The task service instance
        task_id: Full task ID or prefix
        tasklist: Task list title, or None to search all lists

    Returns:
        The matching task

    Raises:
        AppError: If the task ID is empty
    """
    if not task_id.strip():
        raise AppError("Task ID must not be empty", exit_codes.ERROR_INVALID_ARGS)
    if tasklist:
        task_list_id = task_service.resolve_list_id(tasklist)
        return task_service.get_task(task_list_id, task_id)
    return task_service.find_task(task_id)


def parse_due_option(value: str | None) -> date | None:
    """Parse a ``--due`` option in YYYY-MM-DD form.

    Raises:
        ValueError: If the value is not a calendar date
    """
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValueError(f"Invalid due date '{value}', expected YYYY-MM-DD") from None
