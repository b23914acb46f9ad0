"""FastAPI application entry point."""

import logging
import re
from datetime import UTC, datetime
from typing import Any

import uvicorn
from fastapi import APIRouter, Body, Depends, FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from tasklist.config import Settings
from tasklist.logging_setup import setup_logging
from tasklist.models import (
    ErrorResponse,
    HealthResponse,
    TaskCreate,
    TaskListResponse,
    TaskResponse,
    TaskUpdate,
)
from tasklist.store import TaskStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")

TASK_ID_RE = re.compile(r"[0-9]+")


def get_store(request: Request) -> TaskStore:
    return request.app.state.store


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def _parse_task_id(raw: str) -> int | None:
    # ASCII digits only: no sign, spaces, underscores or other scripts
    if TASK_ID_RE.fullmatch(raw) is None:
        return None
    return int(raw)


def _parse_body(model: type[TaskCreate], body: dict[str, Any]) -> TaskCreate:
    try:
        return model.model_validate(body)
    except ValidationError as exc:
        raise RequestValidationError(exc.errors(), body=body) from exc


@router.get("/health", response_model=HealthResponse, tags=["System"])
async def health_check(settings: Settings = Depends(get_settings)) -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(message=settings.health_message, timestamp=datetime.now(UTC))


@router.get(
    "/tasks",
    response_model=TaskListResponse,
    response_model_exclude_none=True,
    tags=["Tasks"],
)
async def list_tasks(store: TaskStore = Depends(get_store)) -> TaskListResponse:
    """List all tasks in insertion order."""
    tasks = store.list_all()
    return TaskListResponse(data=tasks, count=len(tasks))


@router.post(
    "/tasks",
    response_model=TaskResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}},
    tags=["Tasks"],
)
async def create_task(
    body: Any = Body(default=None),
    store: TaskStore = Depends(get_store),
) -> TaskResponse:
    """Create a new task.

    Any body that is not a JSON object (an array, plain text, nothing at
    all) simply carries no title.
    """
    data = _parse_body(TaskCreate, body) if isinstance(body, dict) else None
    if data is None or not data.title:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Title is required",
        )
    return TaskResponse(data=store.create(data.title))


@router.put(
    "/tasks/{task_id}",
    response_model=TaskResponse,
    response_model_exclude_none=True,
    responses={status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
    tags=["Tasks"],
)
async def update_task(
    task_id: str,
    data: TaskUpdate | None = None,
    store: TaskStore = Depends(get_store),
) -> TaskResponse:
    """Update an existing task. A missing body is an empty update."""
    if data is None:
        data = TaskUpdate()
    parsed_id = _parse_task_id(task_id)
    task = store.update(parsed_id, data) if parsed_id is not None else None
    if task is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Task not found",
        )
    return TaskResponse(data=task)


async def _http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=str(exc.detail)).model_dump(),
        headers=exc.headers,
    )


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    message = errors[0]["msg"] if errors else "Invalid request"
    logger.info("Rejected %s %s: %s", request.method, request.url.path, message)
    return JSONResponse(
        status_code=422,
        content=ErrorResponse(error=message).model_dump(),
    )


def create_app(settings: Settings | None = None, store: TaskStore | None = None) -> FastAPI:
    """Build the API around an explicitly owned task store."""
    settings = settings or Settings.from_env()
    if store is None:
        store = TaskStore()
    if settings.seed_sample_tasks:
        store.seed_samples()

    app = FastAPI(
        title="Task List API",
        description="A minimal in-memory task list API.",
        version="1.0.0",
    )
    app.state.settings = settings
    app.state.store = store

    # Configure CORS for frontend access
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.include_router(router)
    return app


def run() -> None:
    """Serve the API with uvicorn using settings from the environment."""
    settings = Settings.from_env()
    setup_logging(settings.log_level)
    app = create_app(settings)

    logger.info("Backend server running on port %d", settings.port)
    logger.info("Health check: http://localhost:%d/api/health", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
