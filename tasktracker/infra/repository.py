from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import date, datetime, timezone
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from tasktracker.domain.entities import Assigned, TaskEntity
from tasktracker.domain.enums import TaskStatus
from tasktracker.domain.errors import NotFoundError, StorageError

from .models import TaskModel

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _to_entity(model: TaskModel) -> TaskEntity:
    return TaskEntity(
        identity=Assigned(model.id),
        title=model.title,
        description=model.description,
        status=TaskStatus(model.status),
        due_date=model.due_date,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


class TaskRepository:
    """SQLAlchemy implementation of the task store.

    Every call runs in its own session. Driver failures are rolled back and
    re-raised as ``StorageError``.
    """

    def __init__(
        self,
        session_factory: sessionmaker,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._session_factory = session_factory
        self._clock = clock

    @contextmanager
    def _session(self) -> Iterator[Session]:
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as exc:
            session.rollback()
            logger.error("Task storage operation failed: %s", exc.__class__.__name__)
            raise StorageError("Task storage operation failed") from exc
        finally:
            session.close()

    def _list(self, stmt) -> list[TaskEntity]:
        with self._session() as session:
            return [_to_entity(task) for task in session.scalars(stmt)]

    def create(self, task: TaskEntity) -> TaskEntity:
        if not task.is_transient:
            raise ValueError(f"Task {task.id} is already persisted")
        now = self._clock()
        with self._session() as session:
            model = TaskModel(
                title=task.title,
                description=task.description,
                status=task.status.value,
                due_date=task.due_date,
                created_at=now,
                updated_at=now,
            )
            session.add(model)
            session.commit()
            session.refresh(model)
            return _to_entity(model)

    def get_by_id(self, task_id: int) -> Optional[TaskEntity]:
        with self._session() as session:
            task = session.get(TaskModel, task_id)
            return _to_entity(task) if task else None

    def list_all(self) -> list[TaskEntity]:
        return self._list(select(TaskModel))

    def list_by_status(self, status: TaskStatus) -> list[TaskEntity]:
        return self._list(select(TaskModel).where(TaskModel.status == status.value))

    def list_due_before(self, day: date, excluding_status: TaskStatus) -> list[TaskEntity]:
        stmt = select(TaskModel).where(
            TaskModel.due_date.is_not(None),
            TaskModel.due_date < day,
            TaskModel.status != excluding_status.value,
        )
        return self._list(stmt)

    def list_by_due_date(self, day: date) -> list[TaskEntity]:
        return self._list(select(TaskModel).where(TaskModel.due_date == day))

    def search_by_title(self, term: str) -> list[TaskEntity]:
        stmt = select(TaskModel).where(TaskModel.title.icontains(term, autoescape=True))
        return self._list(stmt)

    def list_all_ordered_by_due_date(self) -> list[TaskEntity]:
        stmt = select(TaskModel).order_by(
            TaskModel.due_date.is_(None),
            TaskModel.due_date.asc(),
        )
        return self._list(stmt)

    def count_by_status(self, status: TaskStatus) -> int:
        with self._session() as session:
            return session.scalar(
                select(func.count())
                .select_from(TaskModel)
                .where(TaskModel.status == status.value)
            ) or 0

    def exists_by_title(self, title: str) -> bool:
        with self._session() as session:
            found = session.scalar(
                select(TaskModel.id)
                .where(func.lower(TaskModel.title) == func.lower(title))
                .limit(1)
            )
            return found is not None

    def update(self, task: TaskEntity) -> TaskEntity:
        if task.id is None:
            raise ValueError("Cannot update a task that was never persisted")
        with self._session() as session:
            model = session.get(TaskModel, task.id)
            if not model:
                raise NotFoundError(task.id)

            model.title = task.title
            model.description = task.description
            model.status = task.status.value
            model.due_date = task.due_date
            model.updated_at = max(self._clock(), model.created_at)
            session.commit()
            session.refresh(model)
            return _to_entity(model)

    def delete(self, task_id: int) -> None:
        with self._session() as session:
            model = session.get(TaskModel, task_id)
            if not model:
                raise NotFoundError(task_id)
            session.delete(model)
            session.commit()
