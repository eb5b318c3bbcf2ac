"""Recent-message backlog fetched once when a room becomes active.

The backlog travels over plain HTTP, separate from the cable connection.
Sources return the raw JSON payload; turning it into events is the
decoder's job.
"""

from typing import Any

import httpx

from .errors import ReadError
from .models import ServerConfig


class BacklogClient:
    """Fetches a room's recent messages from the HTTP API.

    Example:
        async with BacklogClient(config) as client:
            payload = await client.fetch("lobby", token)
    """

    def __init__(self, config: ServerConfig | None = None) -> None:
        self._config = config or ServerConfig()
        self._client: httpx.AsyncClient | None = None
        self._debug_callback: Any | None = None

    def set_debug_callback(self, callback: Any) -> None:
        self._debug_callback = callback

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, "Backlog", message)

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(base_url=self._config.http_url)
        return self._client

    async def fetch(self, room: str, token: str) -> Any:
        """Fetch the backlog payload for a room.

        Raises:
            ReadError: On transport failure or a non-2xx response
        """
        client = self._get_client()
        path = self._config.backlog_url_path(room)
        self._debug("debug", f"GET {path}")
        try:
            response = await client.get(path, headers={"Authorization": token})
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ReadError(f"backlog for {room}: HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise ReadError(f"backlog for {room}: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            raise ReadError(f"backlog for {room}: invalid JSON") from e

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "BacklogClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()


class StaticBacklog:
    """Backlog source serving fixed payloads per room (offline runs, tests)."""

    def __init__(self, payloads: dict[str, Any] | None = None) -> None:
        self._payloads = payloads or {}
        self.requests: list[str] = []

    async def fetch(self, room: str, token: str) -> Any:
        self.requests.append(room)
        return self._payloads.get(room, [])

    async def close(self) -> None:
        pass
