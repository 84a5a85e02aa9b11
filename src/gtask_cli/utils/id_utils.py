"""Task ID helpers.

Task IDs are long opaque tokens; the CLI shows their first eight characters
and accepts any prefix back.
"""

SHORT_ID_LENGTH = 8


def short_id(task_id: str, length: int = SHORT_ID_LENGTH) -> str:
    """Get the display form of a task ID.

    Args:
        task_id: Full task ID
        length: Number of characters to keep (default 8)

    Returns:
        First N characters of the ID, or the whole ID if it is shorter
    """
    return task_id[:length]


def matches_prefix(task_id: str, prefix: str) -> bool:
    """Check whether a full task ID equals or starts with a non-empty ``prefix``."""
    return bool(prefix) and task_id.startswith(prefix)
