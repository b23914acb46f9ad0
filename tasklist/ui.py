"""Client-side task list state.

``TaskClientUI`` mirrors what the backend holds: it loads health and tasks
on mount, turns user actions into API calls, and rebuilds its local task
list only from what the server sends back. ``render`` turns the current
state into the text shown by the terminal front-end in ``tasklist.cli``.
"""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass

import httpx

from tasklist.client import TaskApiClient
from tasklist.models import Task

logger = logging.getLogger(__name__)

# Failures the UI absorbs: transport errors and unparseable responses.
CLIENT_ERRORS = (httpx.HTTPError, ValueError)


@dataclass(frozen=True)
class BackendHealth:
    status: str
    message: str

    @property
    def ok(self) -> bool:
        return self.status == "OK"


UNREACHABLE = BackendHealth(status="Error", message="Cannot connect to backend")


class TaskClientUI:
    def __init__(self, api: TaskApiClient, alert: Callable[[str], None]) -> None:
        self.api = api
        self.alert = alert
        self.tasks: list[Task] = []
        self.health: BackendHealth | None = None
        self.loading = True

    async def mount(self) -> None:
        """Load health and tasks concurrently."""
        await asyncio.gather(self.check_health(), self.fetch_tasks())

    async def check_health(self) -> None:
        try:
            result = await self.api.health()
        except CLIENT_ERRORS:
            logger.exception("Health check failed")
            self.health = UNREACHABLE
            return
        self.health = BackendHealth(status=result.status, message=result.message)

    async def fetch_tasks(self) -> None:
        self.loading = True
        try:
            result = await self.api.list_tasks()
            if result.success:
                self.tasks = list(result.data)
        except CLIENT_ERRORS:
            logger.exception("Failed to fetch tasks")
            self.alert("Failed to connect to backend API")
        finally:
            self.loading = False

    async def add_task(self, title: str) -> Task | None:
        """Create a task and append the server's copy. Blank input sends nothing."""
        if not title.strip():
            return None

        try:
            result = await self.api.create_task(title)
        except CLIENT_ERRORS:
            logger.exception("Failed to add task")
            self.alert("Failed to add task")
            return None

        if not result.success:
            return None
        self.tasks = [*self.tasks, result.data]
        return result.data

    async def toggle_task(self, task_id: int) -> Task | None:
        """Flip a task's completion flag; failures are only logged."""
        task = self._find(task_id)
        if task is None:
            logger.error("Failed to update task: no task with id %d", task_id)
            return None

        try:
            result = await self.api.update_task(task_id, completed=not task.completed)
        except CLIENT_ERRORS:
            logger.exception("Failed to update task")
            return None

        if not result.success:
            return None
        self.tasks = [result.data if t.id == task_id else t for t in self.tasks]
        return result.data

    def _find(self, task_id: int) -> Task | None:
        return next((t for t in self.tasks if t.id == task_id), None)

    def render(self) -> str:
        if self.health is None:
            status_line = "Checking..."
        else:
            status_line = f"{self.health.status} - {self.health.message}"

        lines = ["Task Manager", f"Backend Status: {status_line}", ""]
        if self.loading:
            lines.append("Loading tasks...")
        elif not self.tasks:
            lines.append("No tasks yet.")
        else:
            for task in self.tasks:
                mark = "x" if task.completed else " "
                lines.append(f"[{mark}] {task.id}. {task.title}")
        return "\n".join(lines)
