"""
Exit codes for gtask-cli.

Each failure class gets its own code so scripts can tell a missing task from
an ambiguous short ID or a network failure.
"""

# Success
SUCCESS = 0

# General error (unspecified)
ERROR_GENERAL = 1

# Invalid arguments, including an ambiguous short task ID
ERROR_INVALID_ARGS = 2

# Authentication failure (not logged in, expired token)
ERROR_AUTH_FAILURE = 3

# Network or API error (server unreachable, timeout, 5xx)
ERROR_NETWORK = 4

# Task list or task not found
ERROR_NOT_FOUND = 5


def get_exit_code_name(code: int) -> str:
    """Get the name of an exit code for display purposes."""
    code_names = {
        SUCCESS: "SUCCESS",
        ERROR_GENERAL: "ERROR_GENERAL",
        ERROR_INVALID_ARGS: "ERROR_INVALID_ARGS",
        ERROR_AUTH_FAILURE: "ERROR_AUTH_FAILURE",
        ERROR_NETWORK: "ERROR_NETWORK",
        ERROR_NOT_FOUND: "ERROR_NOT_FOUND",
    }
    return code_names.get(code, f"UNKNOWN({code})")
