"""Command 'list' of gtask-cli"""

from typing import Annotated, Optional

import typer

from gtask_cli.config import get_config_manager
from gtask_cli.services.task_service import get_task_service
from gtask_cli.utils.ui.formatters import format_output

from .decorators import command_wrapper

app = typer.Typer()


@app.command("list")
@command_wrapper
def list_command(
    tasklist: Annotated[
        Optional[str],
        typer.Option("--tasklist", "-l", help="Task list name (default: all lists)"),
    ] = None,
    output: Annotated[
        Optional[str],
        typer.Option(
            "--output", "-o", help="Output format (table, json, yaml; default: output.format)"
        ),
    ] = None,
    json_opt: Annotated[
        bool, typer.Option("--json", help="Output as JSON (alias for --output json)")
    ] = False,
) -> None:
    """List incomplete tasks."""
    if json_opt:
        output = "json"
    elif output is None:
        output = get_config_manager().config.output.format

    task_service = get_task_service()
    try:
        if tasklist:
            task_list_id = task_service.resolve_list_id(tasklist)
            tasks = task_service.list_tasks(task_list_id)
        else:
            tasks = task_service.list_all_tasks()
    finally:
        task_service.close()

    format_output(tasks, output)
