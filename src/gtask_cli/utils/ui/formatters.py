"""Output formatters for different formats."""

import json
from typing import Any

import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from gtask_cli.models.task import Task
from gtask_cli.utils.id_utils import short_id

console = Console()


def tasks_to_dicts(tasks: list[Task]) -> list[dict[str, Any]]:
    """Serialize tasks for machine-readable output."""
    return [task.model_dump(mode="json", exclude_none=True) for task in tasks]


def format_output(tasks: list[Task], output_format: str = "table") -> None:
    """Format and display a list of tasks."""
    if output_format == "json":
        print(json.dumps(tasks_to_dicts(tasks), indent=2, ensure_ascii=False))
    elif output_format == "yaml":
        print(yaml.safe_dump(tasks_to_dicts(tasks), default_flow_style=False, sort_keys=False))
    else:
        format_tasks_table(tasks)


def format_tasks_table(tasks: list[Task]) -> None:
    """Format tasks as a table with short IDs."""
    if not tasks:
        console.print("[yellow]No tasks found.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("LIST", max_width=16, overflow="ellipsis")
    table.add_column("TITLE", max_width=32, overflow="ellipsis")
    table.add_column("DUE", no_wrap=True)

    for task in tasks:
        table.add_row(
            short_id(task.id),
            escape(task.task_list_name),
            escape(task.title),
            task.due.isoformat() if task.due else "-",
        )

    console.print(table)


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    console.print(f"[bold blue]Info:[/bold blue] {message}")


def _flatten(data: dict[str, Any], prefix: str = "") -> list[tuple[str, Any]]:
    rows: list[tuple[str, Any]] = []
    for key, value in data.items():
        if isinstance(value, dict):
            rows.extend(_flatten(value, f"{prefix}{key}."))
        else:
            rows.append((f"{prefix}{key}", value))
    return rows


def format_config(data: dict[str, Any], output_format: str = "table") -> None:
    """Display configuration values, as dotted keys in table form."""
    if output_format == "json":
        print(json.dumps(data, indent=2))
    elif output_format == "yaml":
        print(yaml.safe_dump(data, default_flow_style=False, sort_keys=False))
    else:
        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("KEY", style="cyan", no_wrap=True)
        table.add_column("VALUE")
        for key, value in _flatten(data):
            table.add_row(key, escape(str(value)))
        console.print(table)
