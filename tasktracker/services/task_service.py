from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace
from datetime import date
from typing import Optional

from tasktracker.domain.entities import TaskDraft, TaskEntity
from tasktracker.domain.enums import TaskStatus
from tasktracker.domain.errors import NotFoundError
from tasktracker.domain.store import TaskStore
from tasktracker.domain.validation import ensure_valid

logger = logging.getLogger(__name__)

_MERGED_FIELDS = ("title", "description", "status", "due_date")


class TaskService:
    def __init__(self, repo: TaskStore, today: Callable[[], date] = date.today) -> None:
        self._repo = repo
        self._today = today

    def today(self) -> date:
        return self._today()

    def list_tasks(self, status: Optional[TaskStatus] = None) -> list[TaskEntity]:
        logger.debug("Listing tasks status=%s", status)
        if status is not None:
            return self._repo.list_by_status(status)
        return self._repo.list_all()

    def get_task(self, task_id: int) -> TaskEntity:
        logger.debug("Fetching task id=%s", task_id)
        task = self._repo.get_by_id(task_id)
        if task is None:
            raise NotFoundError(task_id)
        return task

    def list_overdue(self) -> list[TaskEntity]:
        return self._repo.list_due_before(self._today(), excluding_status=TaskStatus.DONE)

    def list_due_today(self) -> list[TaskEntity]:
        return self._repo.list_by_due_date(self._today())

    def list_ordered_by_due_date(self) -> list[TaskEntity]:
        return self._repo.list_all_ordered_by_due_date()

    def search_tasks(self, term: str) -> list[TaskEntity]:
        term = term.strip()
        if not term:
            return self._repo.list_all()
        return self._repo.search_by_title(term)

    def title_exists(self, title: str) -> bool:
        return self._repo.exists_by_title(title)

    def create_task(self, draft: TaskDraft) -> TaskEntity:
        """Persist a new task built from ``draft``.

        Any id or timestamp on the draft is dropped; the store assigns them.
        """
        ensure_valid(draft.title, draft.description)
        task = TaskEntity(
            title=draft.title,
            description=draft.description,
            status=draft.status or TaskStatus.TODO,
            due_date=draft.due_date,
        )
        created = self._repo.create(task)
        logger.info("Created task id=%s title=%r", created.id, created.title)
        return created

    def replace_task(self, task_id: int, draft: TaskDraft) -> TaskEntity:
        """Overwrite the fields ``draft`` supplies and keep the rest.

        A field left as ``None`` in the draft is never cleared.
        """
        existing = self.get_task(task_id)
        changes = {
            name: getattr(draft, name)
            for name in _MERGED_FIELDS
            if getattr(draft, name) is not None
        }
        merged = replace(existing, **changes)
        ensure_valid(merged.title, merged.description)
        updated = self._repo.update(merged)
        logger.info("Updated task id=%s fields=%s", task_id, sorted(changes))
        return updated

    def set_status(self, task_id: int, status: TaskStatus) -> TaskEntity:
        existing = self.get_task(task_id)
        updated = self._repo.update(replace(existing, status=status))
        logger.info("Task id=%s status %s -> %s", task_id, existing.status, status)
        return updated

    def delete_task(self, task_id: int) -> None:
        self.get_task(task_id)
        self._repo.delete(task_id)
        logger.info("Deleted task id=%s", task_id)

    def get_stats(self) -> dict[str, int]:
        todo = self._repo.count_by_status(TaskStatus.TODO)
        in_progress = self._repo.count_by_status(TaskStatus.IN_PROGRESS)
        done = self._repo.count_by_status(TaskStatus.DONE)
        return {
            "total": todo + in_progress + done,
            "todo": todo,
            "in_progress": in_progress,
            "done": done,
            "overdue": len(self.list_overdue()),
            "due_today": len(self.list_due_today()),
        }
