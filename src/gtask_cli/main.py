"""Main entry point for gtask-cli."""

import typer

from gtask_cli import __version__
from gtask_cli.commands import (
    add_command,
    auth_command,
    config_command,
    delete_command,
    done_command,
    edit_command,
    list_command,
)
from gtask_cli.utils.ui.formatters import console

app = typer.Typer(
    name="gt",
    help="Google Tasks from the command line",
)

app.command("list")(list_command.list_command)
app.command("add")(add_command.add_command)
app.command("done")(done_command.done_command)
app.command("edit")(edit_command.edit_command)
app.command("delete")(delete_command.delete_command)
app.command("login")(auth_command.login_command)
app.command("logout")(auth_command.logout_command)
app.add_typer(config_command.app, name="config")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]gtask-cli[/bold] version [cyan]{__version__}[/cyan]")


@app.callback(invoke_without_command=True)
def default(ctx: typer.Context) -> None:
    """List all tasks when no command is given."""
    if ctx.invoked_subcommand is None:
        list_command.list_command()


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
