"""Tasks API endpoints."""

from typing import Any, Iterator, Optional

from gtask_cli.api.client import APIClient

_PAGE_SIZE = 100


class TasksAPI:
    """Google Tasks API client.

    Methods return the raw JSON resources; conversion to models happens in
    the service layer, which knows the list title to denormalize into tasks.
    """

    def __init__(self, client: APIClient):
        self.client = client

    def _paginate(self, path: str, params: dict[str, Any]) -> Iterator[dict]:
        """Yield every item of a paginated list endpoint."""
        params = {**params, "maxResults": _PAGE_SIZE}
        while True:
            data = self.client.get(path, params=params).json()
            yield from data.get("items", [])
            page_token = data.get("nextPageToken")
            if not page_token:
                return
            params["pageToken"] = page_token

    def list_task_lists(self) -> list[dict]:
        """List all task lists of the user."""
        return list(self._paginate("/users/@me/lists", {}))

    def get_task_list(self, task_list_id: str) -> dict:
        """Get a task list by ID. ``@default`` resolves to the default list."""
        response = self.client.get(f"/users/@me/lists/{task_list_id}")
        return response.json()

    def list_tasks(
        self,
        task_list_id: str,
        *,
        show_completed: bool = False,
        show_hidden: bool = False,
    ) -> list[dict]:
        """List tasks in a task list."""
        params = {"showCompleted": show_completed, "showHidden": show_hidden}
        return list(self._paginate(f"/lists/{task_list_id}/tasks", params))

    def get_task(self, task_list_id: str, task_id: str) -> dict:
        """Get a specific task by ID."""
        response = self.client.get(f"/lists/{task_list_id}/tasks/{task_id}")
        return response.json()

    def insert_task(self, task_list_id: str, body: dict[str, Any]) -> dict:
        """Create a new task."""
        response = self.client.post(f"/lists/{task_list_id}/tasks", json=body)
        return response.json()

    def update_task(
        self, task_list_id: str, task_id: str, body: Optional[dict[str, Any]] = None
    ) -> dict:
        """Update the given fields of a task."""
        response = self.client.patch(
            f"/lists/{task_list_id}/tasks/{task_id}", json=body or {}
        )
        return response.json()

    def delete_task(self, task_list_id: str, task_id: str) -> None:
        """Delete a task."""
        self.client.delete(f"/lists/{task_list_id}/tasks/{task_id}")
