from __future__ import annotations

from datetime import date
from typing import Optional

from .entities import TaskEntity


def is_overdue(task: TaskEntity, today: Optional[date] = None) -> bool:
    # Status is not consulted; the overdue listing filters DONE itself.
    if task.due_date is None:
        return False
    return task.due_date < (today or date.today())


def is_due_today(task: TaskEntity, today: Optional[date] = None) -> bool:
    if task.due_date is None:
        return False
    return task.due_date == (today or date.today())
