"""Task API router."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request, Response, status

from tasktracker.domain.enums import TaskStatus
from tasktracker.domain.errors import ValidationError
from tasktracker.services.task_service import TaskService

from .schemas import TaskPayload, TaskResponse, TaskStatsResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


def get_service(request: Request) -> TaskService:
    return request.app.state.task_service


def _render(service: TaskService, tasks) -> list[TaskResponse]:
    today = service.today()
    return [TaskResponse.from_entity(task, today) for task in tasks]


@router.get("", response_model=list[TaskResponse])
def list_tasks(status: TaskStatus | None = None, service: TaskService = Depends(get_service)):
    logger.info("GET /api/tasks status=%s", status)
    return _render(service, service.list_tasks(status))


@router.get("/overdue", response_model=list[TaskResponse])
def list_overdue(service: TaskService = Depends(get_service)):
    return _render(service, service.list_overdue())


@router.get("/due-today", response_model=list[TaskResponse])
def list_due_today(service: TaskService = Depends(get_service)):
    return _render(service, service.list_due_today())


@router.get("/search", response_model=list[TaskResponse])
def search_tasks(q: str = "", service: TaskService = Depends(get_service)):
    return _render(service, service.search_tasks(q))


@router.get("/stats", response_model=TaskStatsResponse)
def get_stats(service: TaskService = Depends(get_service)):
    return TaskStatsResponse(**service.get_stats())


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(task_id: int, service: TaskService = Depends(get_service)):
    return TaskResponse.from_entity(service.get_task(task_id), service.today())


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(payload: TaskPayload, service: TaskService = Depends(get_service)):
    logger.info("POST /api/tasks title=%r", payload.title)
    created = service.create_task(payload.to_draft())
    return TaskResponse.from_entity(created, service.today())


@router.put("/{task_id}", response_model=TaskResponse)
def replace_task(task_id: int, payload: TaskPayload, service: TaskService = Depends(get_service)):
    logger.info("PUT /api/tasks/%s", task_id)
    if payload.id is not None and payload.id != task_id:
        raise ValidationError({"id": f"Body id {payload.id} does not match path id {task_id}"})
    updated = service.replace_task(task_id, payload.to_draft())
    return TaskResponse.from_entity(updated, service.today())


@router.patch("/{task_id}/status", response_model=TaskResponse)
def set_status(task_id: int, status: TaskStatus, service: TaskService = Depends(get_service)):
    logger.info("PATCH /api/tasks/%s/status status=%s", task_id, status)
    updated = service.set_status(task_id, status)
    return TaskResponse.from_entity(updated, service.today())


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(task_id: int, service: TaskService = Depends(get_service)):
    logger.info("DELETE /api/tasks/%s", task_id)
    service.delete_task(task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
