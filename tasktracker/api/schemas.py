"""Pydantic request/response models for the task API."""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from tasktracker.domain.entities import TaskDraft, TaskEntity
from tasktracker.domain.enums import TaskStatus
from tasktracker.domain.predicates import is_due_today, is_overdue


class TaskPayload(BaseModel):
    """Request body for create and replace.

    Server-owned fields are accepted and then ignored.
    """

    model_config = ConfigDict(extra="ignore")

    id: Optional[int] = None
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    due_date: Optional[date] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_draft(self) -> TaskDraft:
        return TaskDraft(
            title=self.title,
            description=self.description,
            status=self.status,
            due_date=self.due_date,
            id=self.id,
        )


class TaskResponse(BaseModel):
    """Response model for a task."""

    id: int
    title: str
    description: Optional[str]
    status: TaskStatus
    due_date: Optional[date]
    created_at: datetime
    updated_at: datetime
    overdue: bool
    due_today: bool

    @classmethod
    def from_entity(cls, task: TaskEntity, today: date) -> "TaskResponse":
        return cls(
            id=task.id,
            title=task.title,
            description=task.description,
            status=task.status,
            due_date=task.due_date,
            created_at=task.created_at,
            updated_at=task.updated_at,
            overdue=is_overdue(task, today),
            due_today=is_due_today(task, today),
        )


class TaskStatsResponse(BaseModel):
    """Response model for task counters."""

    total: int
    todo: int
    in_progress: int
    done: int
    overdue: int
    due_today: int
