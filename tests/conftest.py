from __future__ import annotations

from datetime import date

import pytest

from tasktracker.config import Settings
from tasktracker.infra.db import create_db_engine, create_schema, create_session_factory
from tasktracker.infra.memory import InMemoryTaskRepository
from tasktracker.infra.repository import TaskRepository
from tasktracker.services.task_service import TaskService

TODAY = date(2026, 3, 10)


@pytest.fixture()
def engine():
    engine = create_db_engine("sqlite:///:memory:")
    create_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def sql_repo(engine) -> TaskRepository:
    return TaskRepository(create_session_factory(engine))


@pytest.fixture(params=["sql", "memory"])
def store(request, engine):
    if request.param == "sql":
        return TaskRepository(create_session_factory(engine))
    return InMemoryTaskRepository()


@pytest.fixture()
def today() -> date:
    return TODAY


@pytest.fixture()
def service(store, today: date) -> TaskService:
    return TaskService(store, today=lambda: today)


@pytest.fixture()
def settings() -> Settings:
    return Settings(database_url="sqlite:///:memory:")
