"""Tests for the client-side task list state, run against the real app."""

import asyncio
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime

import httpx
from fastapi import FastAPI

from tasklist.client import TaskApiClient
from tasklist.models import Task
from tasklist.store import TaskStore
from tasklist.ui import UNREACHABLE, TaskClientUI


def run_with_ui(
    transport: httpx.AsyncBaseTransport,
    scenario: Callable[[TaskClientUI], Awaitable[None]],
) -> list[str]:
    """Drive ``scenario`` with a UI wired to ``transport``; return the alerts raised."""
    alerts: list[str] = []

    async def main() -> None:
        async with TaskApiClient("http://testserver", transport=transport) as api:
            await scenario(TaskClientUI(api, alert=alerts.append))

    asyncio.run(main())
    return alerts


def asgi(app: FastAPI) -> httpx.ASGITransport:
    return httpx.ASGITransport(app=app)


def unreachable() -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    return httpx.MockTransport(handler)


def test_render_before_mount_shows_placeholders() -> None:
    async def scenario(ui: TaskClientUI) -> None:
        screen = ui.render()
        assert "Backend Status: Checking..." in screen
        assert "Loading tasks..." in screen

    assert run_with_ui(unreachable(), scenario) == []


def test_mount_loads_health_and_tasks(app: FastAPI, store: TaskStore) -> None:
    store.seed_samples()

    async def scenario(ui: TaskClientUI) -> None:
        await ui.mount()
        assert ui.health.ok
        assert ui.loading is False
        assert [t.title for t in ui.tasks] == [t.title for t in store.list_all()]
        screen = ui.render()
        assert "Backend Status: OK - Backend is running" in screen
        assert "[x] 1. Learn FastAPI" in screen
        assert "[ ] 2. Build the task API" in screen

    assert run_with_ui(asgi(app), scenario) == []


def test_add_task_appends_server_record(app: FastAPI, store: TaskStore) -> None:
    async def scenario(ui: TaskClientUI) -> None:
        await ui.mount()
        created = await ui.add_task("Write spec")
        assert created is not None
        assert created.id == 1
        assert ui.tasks == store.list_all()
        assert "[ ] 1. Write spec" in ui.render()

    assert run_with_ui(asgi(app), scenario) == []


def test_add_blank_task_sends_nothing() -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(500)

    async def scenario(ui: TaskClientUI) -> None:
        assert await ui.add_task("   ") is None
        assert ui.tasks == []

    assert run_with_ui(httpx.MockTransport(handler), scenario) == []
    assert requests == []


def test_toggle_task_replaces_local_record(app: FastAPI, store: TaskStore) -> None:
    store.create("Write spec")

    async def scenario(ui: TaskClientUI) -> None:
        await ui.mount()
        toggled = await ui.toggle_task(1)
        assert toggled.completed is True
        assert toggled.updated_at is not None
        assert ui.tasks == [toggled]
        assert store.get(1).completed is True

        await ui.toggle_task(1)
        assert ui.tasks[0].completed is False

    assert run_with_ui(asgi(app), scenario) == []


def test_rejected_toggle_leaves_state_untouched(app: FastAPI) -> None:
    ghost = Task(id=5, title="Only local", created_at=datetime(2024, 1, 1, tzinfo=UTC))

    async def scenario(ui: TaskClientUI) -> None:
        ui.tasks = [ghost]
        assert await ui.toggle_task(5) is None
        assert ui.tasks == [ghost]

    assert run_with_ui(asgi(app), scenario) == []


def test_toggle_unknown_local_task_is_ignored(app: FastAPI) -> None:
    async def scenario(ui: TaskClientUI) -> None:
        await ui.mount()
        assert await ui.toggle_task(99) is None

    assert run_with_ui(asgi(app), scenario) == []


def test_unreachable_backend_on_mount() -> None:
    async def scenario(ui: TaskClientUI) -> None:
        await ui.mount()
        assert ui.health == UNREACHABLE
        assert ui.loading is False
        assert "Backend Status: Error - Cannot connect to backend" in ui.render()

    assert run_with_ui(unreachable(), scenario) == ["Failed to connect to backend API"]


def test_add_failure_alerts_but_toggle_failure_only_logs() -> None:
    local = Task(id=1, title="Cached", created_at=datetime(2024, 1, 1, tzinfo=UTC))

    async def scenario(ui: TaskClientUI) -> None:
        ui.tasks = [local]
        assert await ui.add_task("New") is None
        assert await ui.toggle_task(1) is None
        assert ui.tasks == [local]

    assert run_with_ui(unreachable(), scenario) == ["Failed to add task"]


def test_non_json_response_is_absorbed() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="<html>Bad Gateway</html>")

    async def scenario(ui: TaskClientUI) -> None:
        await ui.fetch_tasks()
        assert ui.tasks == []

    assert run_with_ui(httpx.MockTransport(handler), scenario) == ["Failed to connect to backend API"]
