"""In-memory task storage.

Tasks live only as long as the process. The store is owned by the
application object (see ``create_app``) rather than by this module, so
tests and alternative deployments can hand in their own instance.
"""

import logging
from collections.abc import Callable, Iterable
from datetime import UTC, datetime

from tasklist.models import Task, TaskUpdate

logger = logging.getLogger(__name__)

SAMPLE_TASKS: tuple[tuple[str, bool], ...] = (
    ("Learn FastAPI", True),
    ("Build the task API", False),
    ("Deploy the backend", False),
)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class TaskStore:
    """Ordered in-memory task storage."""

    def __init__(self, clock: Callable[[], datetime] = _utcnow) -> None:
        """Initialize an empty task store.

        ``clock`` supplies the timestamps stamped on created and updated tasks.
        """
        self._tasks: dict[int, Task] = {}
        self._next_id = 1
        self._clock = clock

    def __len__(self) -> int:
        return len(self._tasks)

    def list_all(self) -> list[Task]:
        """Return all tasks in insertion order."""
        return list(self._tasks.values())

    def get(self, task_id: int) -> Task | None:
        """Get a task by its ID, or None if not found."""
        return self._tasks.get(task_id)

    def create(self, title: str) -> Task:
        """Append a new, not yet completed task and return it."""
        return self._append(title, completed=False)

    def _append(self, title: str, completed: bool) -> Task:
        task = Task(
            id=self._next_id,
            title=title,
            completed=completed,
            created_at=self._clock(),
        )
        # ids keep increasing even if removal is ever added
        self._next_id += 1
        self._tasks[task.id] = task
        logger.debug("Created task %d: %r", task.id, task.title)
        return task

    def update(self, task_id: int, data: TaskUpdate) -> Task | None:
        """Merge the supplied fields onto an existing task. Returns None if not found.

        Only non-null fields explicitly set on ``data`` are applied; ``updated_at`` is
        stamped on every successful call.
        """
        task = self._tasks.get(task_id)
        if task is None:
            return None

        update_data = data.model_dump(exclude_unset=True, exclude_none=True)
        update_data["updated_at"] = self._clock()
        updated_task = task.model_copy(update=update_data)
        self._tasks[task_id] = updated_task
        logger.debug("Updated task %d with %s", task_id, sorted(update_data))
        return updated_task

    def seed_samples(self, samples: Iterable[tuple[str, bool]] = SAMPLE_TASKS) -> list[Task]:
        """Load demo tasks, marking the ones flagged as done."""
        seeded = [self._append(title, completed) for title, completed in samples]
        logger.info("Seeded %d sample tasks", len(seeded))
        return seeded
