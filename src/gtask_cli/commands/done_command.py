"""Command 'done' of gtask-cli"""

from typing import Annotated, Optional

import typer

from gtask_cli.services.task_service import get_task_service
from gtask_cli.utils.task_helpers import resolve_task
from gtask_cli.utils.ui.formatters import format_success

from .decorators import command_wrapper

app = typer.Typer()


@app.command("done")
@command_wrapper
def done_command(
    task_id: Annotated[str, typer.Argument(help="Task ID or ID prefix")],
    tasklist: Annotated[
        Optional[str],
        typer.Option("--tasklist", "-l", help="Task list name (default: all lists)"),
    ] = None,
) -> None:
    """Mark a task as completed."""
    task_service = get_task_service()
    try:
        task = resolve_task(task_service, task_id, tasklist)
        completed = task_service.complete_task(task.task_list_id, task.id)
    finally:
        task_service.close()

    format_success(f"Completed: {completed.title}")
