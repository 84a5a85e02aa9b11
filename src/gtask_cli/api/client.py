"""HTTP client for the Google Tasks API."""

from typing import Any, Optional

import httpx

from gtask_cli.config import ConfigManager, get_config_manager
from gtask_cli.models.exceptions import NotFoundError, TransportError

# Status codes the API uses for "no such resource"
_NOT_FOUND_STATUSES = (404, 410)


def _error_message(response: httpx.Response) -> str:
    """Pull the human-readable message out of a Google API error body."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return error["message"]
    return response.reason_phrase or f"HTTP {response.status_code}"


class APIClient:
    """Synchronous HTTP client for the Tasks API.

    Errors are translated into the project's taxonomy: a missing resource
    becomes ``NotFoundError``, every other failure ``TransportError``.
    Requests are never retried.
    """

    def __init__(
        self,
        config_manager: Optional[ConfigManager] = None,
        *,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.config_manager = config_manager or get_config_manager()
        self.config = self.config_manager.config
        self.base_url = self.config.api.endpoint.rstrip("/")
        self.timeout = self.config.api.timeout
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    def _get_headers(self) -> dict[str, str]:
        """Get HTTP headers with authentication."""
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        credentials = self.config_manager.load_credentials()
        if credentials and "token" in credentials:
            headers["Authorization"] = f"Bearer {credentials['token']}"
        return headers

    def _get_client(self) -> httpx.Client:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.Client(
                base_url=self.base_url,
                timeout=self.timeout,
                follow_redirects=True,
                transport=self._transport,
            )
        self._client.headers.update(self._get_headers())
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def request(
        self,
        method: str,
        path: str,
        *,
        json: Optional[dict[str, Any]] = None,
        params: Optional[dict[str, Any]] = None,
    ) -> httpx.Response:
        """Make an HTTP request to the API."""
        client = self._get_client()
        url = path if path.startswith("/") else f"/{path}"

        try:
            response = client.request(method=method, url=url, json=json, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            message = f"{method} {url} failed: {_error_message(e.response)}"
            if status in _NOT_FOUND_STATUSES:
                raise NotFoundError(message) from e
            raise TransportError(message, status_code=status) from e
        except httpx.RequestError as e:
            raise TransportError(f"{method} {url} failed: {e}") from e
        return response

    def get(self, path: str, *, params: Optional[dict[str, Any]] = None) -> httpx.Response:
        """Make a GET request."""
        return self.request("GET", path, params=params)

    def post(self, path: str, *, json: Optional[dict[str, Any]] = None) -> httpx.Response:
        """Make a POST request."""
        return self.request("POST", path, json=json)

    def patch(self, path: str, *, json: Optional[dict[str, Any]] = None) -> httpx.Response:
        """Make a PATCH request."""
        return self.request("PATCH", path, json=json)

    def delete(self, path: str) -> httpx.Response:
        """Make a DELETE request."""
        return self.request("DELETE", path)