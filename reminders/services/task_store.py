"""
reminders/services/task_store.py

Task store collaborator used by the action handler.
Task persistence lives with the caller; InMemoryTaskStore backs the gateway
and tests only.
"""

from typing import Optional, Protocol

import structlog

from reminders.schemas import Task

logger = structlog.get_logger(__name__)


class TaskStore(Protocol):
    def remove(self, task: Task) -> None: ...


class InMemoryTaskStore:
    """Dict-backed task store keyed by task identifier."""

    def __init__(self) -> None:
        self._tasks: dict[str, Task] = {}

    def add(self, task: Task) -> None:
        self._tasks[task.id] = task

    def get(self, task_id: str) -> Optional[Task]:
        return self._tasks.get(task_id)

    def list_tasks(self) -> list[Task]:
        return list(self._tasks.values())

    def remove(self, task: Task) -> None:
        if self._tasks.pop(task.id, None) is not None:
            logger.info("task_removed", task_id=task.id)
