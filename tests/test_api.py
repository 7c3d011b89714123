from __future__ import annotations

from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient

from tasktracker.api.app import create_app
from tasktracker.config import Settings
from tasktracker.domain.entities import TaskEntity
from tasktracker.domain.errors import StorageError
from tasktracker.infra.memory import InMemoryTaskRepository
from tasktracker.services.task_service import TaskService


@pytest.fixture()
def client(service: TaskService, settings: Settings) -> TestClient:
    return TestClient(create_app(service, settings))


def _create(client: TestClient, **payload) -> dict:
    response = client.post("/api/tasks", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def test_create_and_fetch_task(client: TestClient, today: date) -> None:
    created = _create(client, id=999, title="Pay invoice", due_date=str(today - timedelta(days=1)))

    assert created["id"] != 999
    assert created["status"] == "TODO"
    assert created["overdue"] is True
    assert created["due_today"] is False

    fetched = client.get(f"/api/tasks/{created['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["title"] == "Pay invoice"


def test_create_invalid_reports_every_field(client: TestClient) -> None:
    response = client.post("/api/tasks", json={"title": "", "description": "x" * 600})

    assert response.status_code == 400
    body = response.json()
    assert body["status"] == 400
    assert body["error"] == "Validation Failed"
    assert body["path"] == "/api/tasks"
    assert body["validation_errors"]["title"] == "Title is required"
    assert "500 characters" in body["validation_errors"]["description"]


def test_unparseable_payload_is_a_validation_error(client: TestClient) -> None:
    response = client.post("/api/tasks", json={"title": "x", "status": "SLEEPING"})

    assert response.status_code == 400
    assert "status" in response.json()["validation_errors"]


def test_missing_task_is_404(client: TestClient) -> None:
    response = client.get("/api/tasks/999")

    assert response.status_code == 404
    body = response.json()
    assert body["error"] == "Not Found"
    assert body["message"] == "Task with id 999 not found"
    assert body["path"] == "/api/tasks/999"
    assert body["timestamp"]


def test_list_with_status_filter(client: TestClient) -> None:
    _create(client, title="a")
    _create(client, title="b", status="IN_PROGRESS")

    response = client.get("/api/tasks", params={"status": "IN_PROGRESS"})

    assert [task["title"] for task in response.json()] == ["b"]
    assert len(client.get("/api/tasks").json()) == 2


def test_put_merges_and_checks_body_id(client: TestClient) -> None:
    created = _create(client, title="Old", description="D")

    mismatch = client.put(f"/api/tasks/{created['id']}", json={"id": created["id"] + 1, "title": "X"})
    assert mismatch.status_code == 400
    assert "id" in mismatch.json()["validation_errors"]

    response = client.put(f"/api/tasks/{created['id']}", json={"id": created["id"], "title": "X"})
    assert response.status_code == 200
    assert response.json()["title"] == "X"
    assert response.json()["description"] == "D"


def test_patch_status_removes_from_overdue(client: TestClient, today: date) -> None:
    created = _create(client, title="Pay invoice", due_date=str(today - timedelta(days=1)))
    assert [t["id"] for t in client.get("/api/tasks/overdue").json()] == [created["id"]]

    response = client.patch(f"/api/tasks/{created['id']}/status", params={"status": "DONE"})

    assert response.status_code == 200
    assert response.json()["status"] == "DONE"
    assert response.json()["overdue"] is True
    assert client.get("/api/tasks/overdue").json() == []


def test_delete_twice(client: TestClient) -> None:
    created = _create(client, title="temp")

    assert client.delete(f"/api/tasks/{created['id']}").status_code == 204
    assert client.delete(f"/api/tasks/{created['id']}").status_code == 404


def test_due_today_search_and_stats(client: TestClient, today: date) -> None:
    _create(client, title="Standup", due_date=str(today))
    _create(client, title="Retro")

    assert [t["title"] for t in client.get("/api/tasks/due-today").json()] == ["Standup"]
    assert [t["title"] for t in client.get("/api/tasks/search", params={"q": "RETRO"}).json()] == ["Retro"]

    stats = client.get("/api/tasks/stats").json()
    assert stats["total"] == 2
    assert stats["due_today"] == 1


class _BrokenStore(InMemoryTaskRepository):
    def list_all(self) -> list[TaskEntity]:
        raise StorageError("connection refused at 10.0.0.5")

    def list_by_status(self, status):
        raise RuntimeError("boom")


def test_storage_error_renders_generic_500(settings: Settings) -> None:
    app = create_app(TaskService(_BrokenStore()), settings)
    client = TestClient(app, raise_server_exceptions=False)

    response = client.get("/api/tasks")

    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "Internal Server Error"
    assert body["message"] == "An unexpected error occurred"
    assert "10.0.0.5" not in response.text


def test_unexpected_error_renders_generic_500(settings: Settings) -> None:
    app = create_app(TaskService(_BrokenStore()), settings)
    client = TestClient(app, raise_server_exceptions=False)

    response = client.get("/api/tasks", params={"status": "DONE"})

    assert response.status_code == 500
    assert "boom" not in response.text


def test_cors_wildcard_without_credentials(client: TestClient) -> None:
    response = client.options(
        "/api/tasks",
        headers={"Origin": "http://example.com", "Access-Control-Request-Method": "GET"},
    )

    assert response.headers["access-control-allow-origin"] == "*"
    assert "access-control-allow-credentials" not in response.headers


def test_cors_restricted_with_credentials(service: TaskService) -> None:
    settings = Settings(
        database_url="sqlite:///:memory:",
        cors_allowed_origins=("http://localhost:5173",),
    )
    client = TestClient(create_app(service, settings))

    allowed = client.options(
        "/api/tasks",
        headers={"Origin": "http://localhost:5173", "Access-Control-Request-Method": "PATCH"},
    )
    denied = client.options(
        "/api/tasks",
        headers={"Origin": "http://evil.test", "Access-Control-Request-Method": "GET"},
    )

    assert allowed.headers["access-control-allow-origin"] == "http://localhost:5173"
    assert allowed.headers["access-control-allow-credentials"] == "true"
    assert denied.status_code == 400
