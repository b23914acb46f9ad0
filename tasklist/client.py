"""Async HTTP client for the task list API."""

import logging
from typing import Any

import httpx

from tasklist.models import ErrorResponse, HealthResponse, TaskListResponse, TaskResponse

logger = logging.getLogger(__name__)


class TaskApiClient:
    """Thin wrapper over ``httpx.AsyncClient`` speaking the API's JSON envelopes.

    Network failures surface as ``httpx.HTTPError``; bodies that are not
    JSON, or not one of the known envelopes, surface as ``ValueError``.
    """

    def __init__(self, base_url: str, *, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._http = httpx.AsyncClient(base_url=base_url, transport=transport)

    async def __aenter__(self) -> "TaskApiClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def health(self) -> HealthResponse:
        response = await self._http.get("/api/health")
        return HealthResponse.model_validate(response.json())

    async def list_tasks(self) -> TaskListResponse | ErrorResponse:
        response = await self._http.get("/api/tasks")
        return self._envelope(response, TaskListResponse)

    async def create_task(self, title: str) -> TaskResponse | ErrorResponse:
        response = await self._http.post("/api/tasks", json={"title": title})
        return self._envelope(response, TaskResponse)

    async def update_task(self, task_id: int, **fields: Any) -> TaskResponse | ErrorResponse:
        response = await self._http.put(f"/api/tasks/{task_id}", json=fields)
        return self._envelope(response, TaskResponse)

    @staticmethod
    def _envelope(
        response: httpx.Response,
        model: type[TaskResponse] | type[TaskListResponse],
    ) -> Any:
        payload = response.json()
        if isinstance(payload, dict) and payload.get("success"):
            return model.model_validate(payload)
        logger.debug("%s %s answered %d: %s", response.request.method, response.request.url,
                     response.status_code, payload)
        return ErrorResponse.model_validate(payload)
