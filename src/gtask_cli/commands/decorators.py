"""Decorators for command functions."""

import functools
import time
import traceback
from collections.abc import Callable

import typer

from gtask_cli.config import get_config_manager
from gtask_cli.models.exceptions import (
    AmbiguousIdError,
    GTaskError,
    NotFoundError,
    TransportError,
)
from gtask_cli.utils import exit_codes
from gtask_cli.utils.logger import get_logger
from gtask_cli.utils.ui.formatters import format_error


def _require_auth() -> None:
    """Require a stored access token."""
    if not get_config_manager().has_credentials():
        format_error("Not logged in. Use 'gt login' to store an access token.")
        raise typer.Exit(exit_codes.ERROR_AUTH_FAILURE)


class AppError(Exception):
    """Custom application error with exit code."""

    def __init__(self, message: str, exit_code: int = exit_codes.ERROR_GENERAL):
        super().__init__(message)
        self.exit_code = exit_code


def _exit_code_for(error: GTaskError) -> int:
    """Map a domain error to the process exit code."""
    if isinstance(error, NotFoundError):
        return exit_codes.ERROR_NOT_FOUND
    if isinstance(error, AmbiguousIdError):
        return exit_codes.ERROR_INVALID_ARGS
    if isinstance(error, TransportError):
        if error.status_code in (401, 403):
            return exit_codes.ERROR_AUTH_FAILURE
        return exit_codes.ERROR_NETWORK
    return exit_codes.ERROR_GENERAL


def command_wrapper(_func: Callable | None = None, *, auth_required: bool = True):
    """Decorator to wrap command functions with logging and error reporting."""

    def decorator(func: Callable):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            logger = get_logger()
            cmd = func.__name__
            start = time.monotonic()
            logger.info("command started: %s", cmd)
            try:
                if auth_required:
                    _require_auth()

                result = func(*args, **kwargs)

                elapsed = time.monotonic() - start
                logger.info("command completed: %s (%.3fs)", cmd, elapsed)
                return result

            except (AppError, GTaskError) as e:
                code = e.exit_code if isinstance(e, AppError) else _exit_code_for(e)
                elapsed = time.monotonic() - start
                logger.error(
                    "command failed: %s (%.3fs) [%s] - %s",
                    cmd,
                    elapsed,
                    exit_codes.get_exit_code_name(code),
                    str(e),
                )
                format_error(str(e))
                raise typer.Exit(code=code) from e

            except typer.Exit:
                raise

            except Exception as e:
                elapsed = time.monotonic() - start
                logger.error(
                    "command failed: %s (%.3fs) - %s\n%s",
                    cmd,
                    elapsed,
                    str(e),
                    traceback.format_exc(),
                )
                format_error(f"An unexpected error occurred: {str(e)}")
                raise typer.Exit(code=exit_codes.ERROR_GENERAL) from e

        return wrapper

    if _func is None:
        return decorator
    return decorator(_func)
