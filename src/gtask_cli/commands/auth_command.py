"""Commands 'login' and 'logout' of gtask-cli"""

from typing import Annotated, Optional

import typer
from rich.prompt import Prompt

from gtask_cli.config import get_config_manager
from gtask_cli.models.exceptions import PersistenceError
from gtask_cli.services.mirror_store import MirrorStore
from gtask_cli.utils.ui.formatters import format_error, format_success, format_warning

app = typer.Typer()


@app.command("login")
def login_command(
    token: Annotated[
        Optional[str], typer.Option("--token", help="OAuth access token")
    ] = None,
) -> None:
    """Store an OAuth access token for the Tasks API."""
    config_manager = get_config_manager()

    if config_manager.has_credentials():
        format_warning("Already logged in. Run 'gt logout' first to replace the token.")
        return

    if not token:
        token = Prompt.ask("Access token", password=True)
    if not token:
        format_error("An access token is required")
        raise typer.Exit(1)

    config_manager.save_credentials(token)
    format_success("Token saved")


@app.command("logout")
def logout_command() -> None:
    """Remove the stored token and the local task cache."""
    config_manager = get_config_manager()
    config_manager.clear_credentials()

    try:
        MirrorStore().invalidate()
    except PersistenceError as e:
        format_warning(f"Could not clear the task cache: {e}")

    format_success("Logged out")
