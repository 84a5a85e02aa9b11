"""Command 'add' of gtask-cli"""

from typing import Annotated, Optional

import typer

from gtask_cli.models.task import TaskDraft
from gtask_cli.services.task_service import get_task_service
from gtask_cli.utils import exit_codes
from gtask_cli.utils.id_utils import short_id
from gtask_cli.utils.task_helpers import parse_due_option
from gtask_cli.utils.ui.formatters import format_success

from .decorators import AppError, command_wrapper

app = typer.Typer()


@app.command("add")
@command_wrapper
def add_command(
    title: Annotated[str, typer.Argument(help="Task title")],
    tasklist: Annotated[
        str, typer.Option("--tasklist", "-l", help="Target task list name")
    ] = "@default",
    notes: Annotated[str, typer.Option("--notes", "-n", help="Task notes")] = "",
    due: Annotated[
        Optional[str], typer.Option("--due", "-d", help="Due date (YYYY-MM-DD)")
    ] = None,
) -> None:
    """Add a task."""
    try:
        draft = TaskDraft(title=title, notes=notes, due=parse_due_option(due))
    except ValueError as e:
        raise AppError(str(e), exit_codes.ERROR_INVALID_ARGS) from e

    task_service = get_task_service()
    try:
        task_list_id = task_service.resolve_list_id(tasklist)
        created = task_service.create_task(task_list_id, draft)
    finally:
        task_service.close()

    format_success(f"Task added: {created.title} (ID: {short_id(created.id)})")
