"""Task API endpoints.

All routes act on the caller's own tasks. Reading, updating or deleting a task
that belongs to someone else answers 404, the same as a task that never existed.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from src.api.dependencies import get_current_identity, get_task_service
from src.schemas.task import TaskCreate, TaskResponse, TaskUpdate
from src.services.auth import AuthenticatedIdentity
from src.services.task_service import TaskService

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


@router.get("", response_model=list[TaskResponse])
def get_tasks(
    identity: Annotated[AuthenticatedIdentity, Depends(get_current_identity)],
    service: Annotated[TaskService, Depends(get_task_service)],
):
    """Get all tasks for the current user."""
    return service.list_owned(identity)


@router.get("/status/{task_status}", response_model=list[TaskResponse])
def get_tasks_by_status(
    task_status: str,
    identity: Annotated[AuthenticatedIdentity, Depends(get_current_identity)],
    service: Annotated[TaskService, Depends(get_task_service)],
):
    """Get the current user's tasks with an exact status."""
    return service.list_owned(identity, status=task_status)


@router.get("/priority/{priority}", response_model=list[TaskResponse])
def get_tasks_by_priority(
    priority: str,
    identity: Annotated[AuthenticatedIdentity, Depends(get_current_identity)],
    service: Annotated[TaskService, Depends(get_task_service)],
):
    """Get the current user's tasks with an exact priority."""
    return service.list_owned(identity, priority=priority)


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(
    task_id: int,
    identity: Annotated[AuthenticatedIdentity, Depends(get_current_identity)],
    service: Annotated[TaskService, Depends(get_task_service)],
):
    """Get a specific task."""
    return service.resolve_owned_task(task_id, identity)


@router.post("", response_model=TaskResponse)
def create_task(
    task_data: TaskCreate,
    identity: Annotated[AuthenticatedIdentity, Depends(get_current_identity)],
    service: Annotated[TaskService, Depends(get_task_service)],
):
    """Create a task owned by the current user."""
    return service.create_task(identity, task_data)


@router.put("/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: int,
    task_data: TaskUpdate,
    identity: Annotated[AuthenticatedIdentity, Depends(get_current_identity)],
    service: Annotated[TaskService, Depends(get_task_service)],
):
    """Update a task's title, description, status or priority."""
    return service.update_task(task_id, identity, task_data)


@router.delete("/{task_id}", response_class=PlainTextResponse)
def delete_task(
    task_id: int,
    identity: Annotated[AuthenticatedIdentity, Depends(get_current_identity)],
    service: Annotated[TaskService, Depends(get_task_service)],
):
    """Delete a task."""
    service.delete_task(task_id, identity)
    return "Task deleted successfully"
