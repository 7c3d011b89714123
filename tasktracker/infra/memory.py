from __future__ import annotations

import threading
from collections.abc import Callable, Iterable
from dataclasses import replace
from datetime import date, datetime
from itertools import count
from typing import Optional

from tasktracker.domain.entities import Assigned, TaskEntity
from tasktracker.domain.enums import TaskStatus
from tasktracker.domain.errors import NotFoundError

from .repository import utcnow


class InMemoryTaskRepository:
    """Process-local task store keyed by id, guarded by a single lock."""

    def __init__(self, clock: Callable[[], datetime] = utcnow) -> None:
        self._clock = clock
        self._tasks: dict[int, TaskEntity] = {}
        self._ids = count(1)
        self._lock = threading.Lock()

    def _select(self, predicate: Callable[[TaskEntity], bool]) -> list[TaskEntity]:
        with self._lock:
            return [task for task in self._tasks.values() if predicate(task)]

    def create(self, task: TaskEntity) -> TaskEntity:
        if not task.is_transient:
            raise ValueError(f"Task {task.id} is already persisted")
        now = self._clock()
        with self._lock:
            stored = replace(
                task,
                identity=Assigned(next(self._ids)),
                created_at=now,
                updated_at=now,
            )
            self._tasks[stored.id] = stored
        return stored

    def get_by_id(self, task_id: int) -> Optional[TaskEntity]:
        with self._lock:
            return self._tasks.get(task_id)

    def list_all(self) -> list[TaskEntity]:
        return self._select(lambda task: True)

    def list_by_status(self, status: TaskStatus) -> list[TaskEntity]:
        return self._select(lambda task: task.status == status)

    def list_due_before(self, day: date, excluding_status: TaskStatus) -> list[TaskEntity]:
        return self._select(
            lambda task: task.due_date is not None
            and task.due_date < day
            and task.status != excluding_status
        )

    def list_by_due_date(self, day: date) -> list[TaskEntity]:
        return self._select(lambda task: task.due_date == day)

    def search_by_title(self, term: str) -> list[TaskEntity]:
        needle = term.lower()
        return self._select(lambda task: needle in task.title.lower())

    def list_all_ordered_by_due_date(self) -> list[TaskEntity]:
        return _ordered_by_due_date(self.list_all())

    def count_by_status(self, status: TaskStatus) -> int:
        return len(self.list_by_status(status))

    def exists_by_title(self, title: str) -> bool:
        wanted = title.lower()
        return bool(self._select(lambda task: task.title.lower() == wanted))

    def update(self, task: TaskEntity) -> TaskEntity:
        if task.id is None:
            raise ValueError("Cannot update a task that was never persisted")
        with self._lock:
            current = self._tasks.get(task.id)
            if current is None:
                raise NotFoundError(task.id)
            stored = replace(
                current,
                title=task.title,
                description=task.description,
                status=task.status,
                due_date=task.due_date,
                updated_at=max(self._clock(), current.created_at),
            )
            self._tasks[task.id] = stored
        return stored

    def delete(self, task_id: int) -> None:
        with self._lock:
            if task_id not in self._tasks:
                raise NotFoundError(task_id)
            del self._tasks[task_id]


def _ordered_by_due_date(tasks: Iterable[TaskEntity]) -> list[TaskEntity]:
    return sorted(tasks, key=lambda task: (task.due_date is None, task.due_date or date.min))
