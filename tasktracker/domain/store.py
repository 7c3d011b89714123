from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from .entities import TaskEntity
from .enums import TaskStatus


class TaskStore(Protocol):
    """Persistence contract for tasks.

    Implementations own ids and timestamps: ``create`` assigns a fresh id and
    stamps ``created_at``/``updated_at`` with one "now", ``update`` refreshes
    only ``updated_at``. They apply no business rules, report a missing record
    on ``update``/``delete`` as ``NotFoundError`` and any durability failure
    as ``StorageError``.
    """

    def create(self, task: TaskEntity) -> TaskEntity: ...

    def get_by_id(self, task_id: int) -> Optional[TaskEntity]: ...

    def list_all(self) -> list[TaskEntity]: ...

    def list_by_status(self, status: TaskStatus) -> list[TaskEntity]: ...

    def list_due_before(self, day: date, excluding_status: TaskStatus) -> list[TaskEntity]:
        """Tasks with ``due_date < day`` whose status differs; undated tasks never match."""
        ...

    def list_by_due_date(self, day: date) -> list[TaskEntity]: ...

    def search_by_title(self, term: str) -> list[TaskEntity]:
        """Case-insensitive substring match on the title."""
        ...

    def list_all_ordered_by_due_date(self) -> list[TaskEntity]:
        """Ascending by due date, undated tasks after every dated one."""
        ...

    def count_by_status(self, status: TaskStatus) -> int: ...

    def exists_by_title(self, title: str) -> bool:
        """Exact title match ignoring case."""
        ...

    def update(self, task: TaskEntity) -> TaskEntity: ...

    def delete(self, task_id: int) -> None: ...
