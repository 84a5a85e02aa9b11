"""Command 'edit' of gtask-cli"""

from typing import Annotated, Any, Optional

import typer

from gtask_cli.models.task import (
    STATUS_COMPLETED,
    STATUS_NEEDS_ACTION,
    TaskDraft,
    TaskUpdate,
)
from gtask_cli.services.task_service import get_task_service
from gtask_cli.utils import exit_codes
from gtask_cli.utils.id_utils import short_id
from gtask_cli.utils.task_helpers import parse_due_option, resolve_task
from gtask_cli.utils.ui.formatters import format_success

from .decorators import AppError, command_wrapper

app = typer.Typer()


def _collect_changes(
    title: Optional[str],
    notes: Optional[str],
    due: Optional[str],
    clear_due: bool,
    completed: Optional[bool],
) -> dict[str, Any]:
    """Turn the edit options into TaskUpdate fields, keeping only those given."""
    if due and clear_due:
        raise AppError("--due and --clear-due cannot be used together", exit_codes.ERROR_INVALID_ARGS)

    changes: dict[str, Any] = {}
    if title is not None:
        changes["title"] = title
    if notes is not None:
        changes["notes"] = notes
    if clear_due:
        changes["due"] = None
    elif due:
        try:
            changes["due"] = parse_due_option(due)
        except ValueError as e:
            raise AppError(str(e), exit_codes.ERROR_INVALID_ARGS) from e
    if completed is not None:
        changes["status"] = STATUS_COMPLETED if completed else STATUS_NEEDS_ACTION
    return changes


@app.command("edit")
@command_wrapper
def edit_command(
    task_id: Annotated[str, typer.Argument(help="Task ID or ID prefix")],
    tasklist: Annotated[
        Optional[str],
        typer.Option("--tasklist", "-l", help="Task list name (default: all lists)"),
    ] = None,
    title: Annotated[Optional[str], typer.Option("--title", help="New title")] = None,
    notes: Annotated[Optional[str], typer.Option("--notes", help="New notes")] = None,
    due: Annotated[
        Optional[str], typer.Option("--due", help="New due date (YYYY-MM-DD)")
    ] = None,
    clear_due: Annotated[
        bool, typer.Option("--clear-due", help="Remove the due date")
    ] = False,
    completed: Annotated[
        Optional[bool],
        typer.Option("--completed/--not-completed", help="Set completion status"),
    ] = None,
    move_to: Annotated[
        Optional[str], typer.Option("--move-to", help="Move the task to this list")
    ] = None,
) -> None:
    """Edit a task."""
    changes = _collect_changes(title, notes, due, clear_due, completed)

    task_service = get_task_service()
    try:
        task = resolve_task(task_service, task_id, tasklist)

        if move_to and move_to != task.task_list_name:
            dest_id = task_service.resolve_list_id(move_to)
            if dest_id != task.task_list_id:
                draft = TaskDraft(
                    title=changes.get("title", task.title),
                    notes=changes.get("notes", task.notes),
                    due=changes.get("due", task.due),
                    status=changes.get("status", task.status),
                )
                moved = task_service.move_task(task.task_list_id, task.id, dest_id, draft)
                format_success(f"Task moved: {moved.title} (new ID: {short_id(moved.id)})")
                return

        if not changes:
            raise AppError("Nothing to update", exit_codes.ERROR_INVALID_ARGS)

        updated = task_service.update_task(task.task_list_id, task.id, TaskUpdate(**changes))
    finally:
        task_service.close()

    format_success(f"Task updated: {updated.title}")
