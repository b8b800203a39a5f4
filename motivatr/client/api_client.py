"""Async HTTP client for the Motivatr REST API (httpx)."""
import logging
from typing import Any, Optional

import httpx

from motivatr.config import get_settings

logger = logging.getLogger(__name__)


class ClientError(Exception):
    """Any failed API call; the message is safe to show to the user."""


class MotivatrClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        http: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
    ):
        settings = get_settings()
        self._owns_http = http is None
        self._http = http or httpx.AsyncClient(
            base_url=base_url or settings.CLIENT_BASE_URL,
            timeout=timeout or settings.CLIENT_TIMEOUT_SECONDS,
        )

    async def __aenter__(self) -> "MotivatrClient":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def _request(self, method: str, url: str, failure: str, **kwargs) -> Any:
        try:
            resp = await self._http.request(method, url, **kwargs)
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.warning("%s %s -> %s", method, url, exc.response.status_code)
            raise ClientError(failure) from exc
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise ClientError(failure) from exc
        return resp.json()

    # -- tasks --------------------------------------------------------------

    async def list_tasks(self, owner: Optional[str] = None) -> list[dict[str, Any]]:
        params = {"owner": owner} if owner else None
        return await self._request("GET", "/api/tasks", "Failed to fetch tasks", params=params)

    async def create_task(self, task: dict[str, Any]) -> dict[str, Any]:
        if not task.get("owner"):
            raise ClientError("owner is required to create a task")
        return await self._request("POST", "/api/tasks", "Failed to create task", json=task)

    async def update_task(self, task_id: str, updates: dict[str, Any]) -> dict[str, Any]:
        return await self._request(
            "PUT", f"/api/tasks/{task_id}", "Failed to update task", json=updates
        )

    async def delete_task(self, task_id: str) -> dict[str, Any]:
        return await self._request("DELETE", f"/api/tasks/{task_id}", "Failed to delete task")

    # -- users --------------------------------------------------------------

    async def get_streak(self, email: str) -> dict[str, Any]:
        return await self._request("GET", f"/api/users/{email}/streak", "Failed to fetch streak")

    async def get_profile(self, email: str) -> dict[str, Any]:
        return await self._request("GET", f"/api/users/{email}/profile", "Failed to fetch profile")

    async def signup(
        self, name: str, email: str, password: str, avatar: Optional[str] = None
    ) -> dict[str, Any]:
        body = {"name": name, "email": email, "password": password, "avatar": avatar}
        data = await self._request("POST", "/signup", "Signup failed", json=body)
        return data["user"]

    async def login(self, email: str, password: str) -> dict[str, Any]:
        body = {"email": email, "password": password}
        data = await self._request("POST", "/login", "Login failed", json=body)
        return data["user"]
