"""Failure kinds produced by the task core.

Stores translate driver failures into ``StorageError`` and report missing
records on ``update``/``delete`` as ``NotFoundError``. The service raises
``ValidationError`` before anything reaches a store, and turns a ``None``
lookup into ``NotFoundError``. Everything else propagates unchanged.
"""
from __future__ import annotations


class DomainError(Exception):
    """Base class for every failure the task core raises on purpose."""


class ValidationError(DomainError):
    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = dict(errors)
        fields = ", ".join(sorted(self.errors))
        super().__init__(f"Validation failed for: {fields}")


class NotFoundError(DomainError):
    def __init__(self, task_id: int) -> None:
        self.task_id = task_id
        super().__init__(f"Task with id {task_id} not found")


class StorageError(DomainError):
    pass
