"""Pydantic models for the task list API.

Field names are snake_case in Python and camelCase on the wire
(``createdAt``, ``updatedAt``). Every task response is wrapped in a
``{success, data}`` envelope; failures use ``{success: false, error}``.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class TaskCreate(BaseModel):
    """Request body for creating a new task.

    The title is optional at the schema level so that a missing title is
    reported by the route as a client-input error rather than a validation
    error.
    """

    title: str | None = Field(
        default=None,
        description="The task title (required, non-empty)",
    )


class TaskUpdate(BaseModel):
    """Fields accepted when updating a task. Anything else is ignored."""

    title: str | None = Field(
        default=None,
        min_length=1,
        description="New title for the task",
    )
    completed: bool | None = Field(
        default=None,
        description="New completion status",
    )


class Task(BaseModel):
    """A task item in the task list."""

    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(..., description="Identifier, unique for the lifetime of the store")
    title: str = Field(..., description="The task title")
    completed: bool = Field(default=False, description="Whether the task has been completed")
    created_at: datetime = Field(..., alias="createdAt", description="When the task was created")
    updated_at: datetime | None = Field(
        default=None,
        alias="updatedAt",
        description="When the task was last updated, absent until the first update",
    )


class TaskResponse(BaseModel):
    success: bool = True
    data: Task


class TaskListResponse(BaseModel):
    success: bool = True
    data: list[Task]
    count: int


class ErrorResponse(BaseModel):
    success: bool = False
    error: str


class HealthResponse(BaseModel):
    """Response from the health check endpoint."""

    status: str = "OK"
    message: str
    timestamp: datetime
