"""Command 'delete' of gtask-cli"""

from typing import Annotated, Optional

import typer

from gtask_cli.services.task_service import get_task_service
from gtask_cli.utils.task_helpers import resolve_task
from gtask_cli.utils.ui.formatters import format_info, format_success

from .decorators import command_wrapper

app = typer.Typer()


@app.command("delete")
@command_wrapper
def delete_command(
    task_id: Annotated[str, typer.Argument(help="Task ID or ID prefix")],
    tasklist: Annotated[
        Optional[str],
        typer.Option("--tasklist", "-l", help="Task list name (default: all lists)"),
    ] = None,
    force: Annotated[
        bool, typer.Option("--force", "-f", help="Skip confirmation")
    ] = False,
) -> None:
    """Delete a task."""
    task_service = get_task_service()
    try:
        task = resolve_task(task_service, task_id, tasklist)

        if not force and not typer.confirm(f"Delete task '{task.title}'?"):
            format_info("Cancelled")
            raise typer.Exit(0)

        task_service.delete_task(task.task_list_id, task.id)
    finally:
        task_service.close()

    format_success(f"Task deleted: {task.title}")
