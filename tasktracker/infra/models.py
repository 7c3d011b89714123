from __future__ import annotations

from sqlalchemy import Column, Date, DateTime, Integer, String

from .db import Base


class TaskModel(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True)
    title = Column(String(100), nullable=False)
    description = Column(String(500), nullable=True)
    status = Column(String(20), nullable=False, default="TODO", index=True)
    due_date = Column(Date, nullable=True, index=True)
    # Stamped by TaskRepository.create/update, never by column defaults.
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)
