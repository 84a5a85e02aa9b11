"""Command 'config' of gtask-cli"""

from typing import Annotated, Any, Optional

import typer
from pydantic import ValidationError

from gtask_cli.config import get_config_manager
from gtask_cli.utils import exit_codes
from gtask_cli.utils.ui.formatters import console, format_config, format_info, format_success

from .decorators import AppError, command_wrapper

app = typer.Typer(help="View and change configuration")


def _parse_value(value: str) -> Any:
    """Convert a command-line string to bool or int where it looks like one."""
    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    if value.isdigit():
        return int(value)
    return value


def _unknown_key(key: str) -> AppError:
    return AppError(f"Unknown configuration key '{key}'", exit_codes.ERROR_INVALID_ARGS)


@app.command("view")
@command_wrapper(auth_required=False)
def view_command(
    output: Annotated[
        str, typer.Option("--output", "-o", help="Output format (table, json, yaml)")
    ] = "table",
) -> None:
    """Show the current configuration."""
    format_config(get_config_manager().config.model_dump(), output)


@app.command("get")
@command_wrapper(auth_required=False)
def get_command(
    key: Annotated[str, typer.Argument(help="Configuration key (e.g. output.format)")],
) -> None:
    """Print one configuration value."""
    value = get_config_manager().get(key)
    if value is None:
        raise _unknown_key(key)
    console.print(value, highlight=False)


@app.command("set")
@command_wrapper(auth_required=False)
def set_command(
    key: Annotated[str, typer.Argument(help="Configuration key (e.g. cache.ttl)")],
    value: Annotated[str, typer.Argument(help="New value")],
) -> None:
    """Change one configuration value."""
    parsed = _parse_value(value)
    try:
        get_config_manager().set(key, parsed)
    except KeyError:
        raise _unknown_key(key) from None
    except ValidationError as e:
        reason = e.errors()[0]["msg"]
        raise AppError(
            f"Invalid value '{value}' for '{key}': {reason}", exit_codes.ERROR_INVALID_ARGS
        ) from e

    format_success(f"Configuration '{key}' set to '{parsed}'")


@app.command("reset")
@command_wrapper(auth_required=False)
def reset_command(
    key: Annotated[
        Optional[str], typer.Argument(help="Configuration key (default: everything)")
    ] = None,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
) -> None:
    """Reset configuration to defaults."""
    config_manager = get_config_manager()
    if key is not None and config_manager.get(key) is None:
        raise _unknown_key(key)

    target = f"'{key}'" if key else "the entire configuration"
    if not yes and not typer.confirm(f"Reset {target} to defaults?"):
        format_info("Cancelled")
        raise typer.Exit(0)

    config_manager.reset(key)
    if key:
        format_success(f"Configuration '{key}' reset to default")
    else:
        format_success("Configuration reset to defaults")
