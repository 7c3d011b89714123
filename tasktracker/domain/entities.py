from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional, Union

from .enums import TaskStatus


class Unassigned:
    """Identity of a task no store has persisted yet.

    Instances compare by reference only, so two transient tasks are never
    equal to each other.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return "Unassigned()"


@dataclass(frozen=True)
class Assigned:
    value: int


TaskIdentity = Union[Assigned, Unassigned]


@dataclass(frozen=True, eq=False)
class TaskEntity:
    title: str
    description: Optional[str] = None
    status: TaskStatus = TaskStatus.TODO
    due_date: Optional[date] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    identity: TaskIdentity = field(default_factory=Unassigned)

    @property
    def id(self) -> int | None:
        if isinstance(self.identity, Assigned):
            return self.identity.value
        return None

    @property
    def is_transient(self) -> bool:
        return not isinstance(self.identity, Assigned)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, TaskEntity):
            return NotImplemented
        if self.is_transient or other.is_transient:
            return False
        return self.identity == other.identity

    def __hash__(self) -> int:
        if self.is_transient:
            return object.__hash__(self)
        return hash(self.identity)

    def __repr__(self) -> str:
        return (
            f"TaskEntity(id={self.id!r}, title={self.title!r}, status={self.status.value}, "
            f"due_date={self.due_date!r}, created_at={self.created_at!r})"
        )


@dataclass(frozen=True)
class TaskDraft:
    """Task-shaped input for create and replace.

    ``None`` means "not supplied". ``id``, ``created_at`` and ``updated_at``
    are accepted so callers can pass a whole record back, but the service
    never reads them.
    """

    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    due_date: Optional[date] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
