"""Custom exceptions for gtask-cli."""

from __future__ import annotations


class GTaskError(Exception):
    """Base exception for all gtask-cli errors."""


class NotFoundError(GTaskError):
    """Raised when a task list or task does not exist."""


class AmbiguousIdError(GTaskError):
    """Raised when a short task ID matches more than one task in its scope."""

    def __init__(self, short_id: str, matches: list[str], scope: str):
        self.short_id = short_id
        self.matches = matches
        self.scope = scope

        shown = ", ".join(m[:8] for m in matches[:5])
        if len(matches) > 5:
            shown += f", ... ({len(matches)} total)"
        super().__init__(
            f"Task ID '{short_id}' matches {len(matches)} tasks in list "
            f"'{scope}': {shown}. Please use a longer ID."
        )


class TransportError(GTaskError):
    """Raised when a remote call fails for network, auth or server reasons."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class PersistenceError(GTaskError):
    """Raised when the local mirror cannot be written or removed."""
