"""Routes handling owner-scoped task CRUD operations."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...deps import SessionUserIdDependency, TaskServiceDependency
from ...models import Task
from ...schemas import MessageResponse, TaskCreate, TaskRead, TaskUpdate

router = APIRouter(prefix="/tasks", tags=["tasks"])


def _map_task(task: Task) -> TaskRead:
    return TaskRead.model_validate(task)


@router.get(
    "",
    response_model=list[TaskRead],
    response_model_exclude_none=True,
    summary="List the caller's tasks",
)
async def list_tasks(
    owner_id: SessionUserIdDependency,
    service: TaskServiceDependency,
) -> list[TaskRead]:
    tasks = await service.list_tasks(owner_id)
    return [_map_task(task) for task in tasks]


@router.post(
    "",
    response_model=TaskRead,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    summary="Create a new task",
)
async def create_task(
    payload: TaskCreate,
    owner_id: SessionUserIdDependency,
    service: TaskServiceDependency,
) -> TaskRead:
    task = await service.create_task(
        owner_id=owner_id,
        title=payload.title,
        description=payload.description,
    )
    return _map_task(task)


@router.put(
    "/{task_id}",
    response_model=TaskRead,
    response_model_exclude_none=True,
    summary="Update one of the caller's tasks",
)
async def update_task(
    task_id: str,
    payload: TaskUpdate,
    owner_id: SessionUserIdDependency,
    service: TaskServiceDependency,
) -> TaskRead:
    task = await service.update_task(
        task_id,
        owner_id,
        title=payload.title,
        description=payload.description,
    )
    return _map_task(task)


@router.delete(
    "/{task_id}",
    response_model=MessageResponse,
    summary="Delete one of the caller's tasks",
)
async def delete_task(
    task_id: str,
    owner_id: SessionUserIdDependency,
    service: TaskServiceDependency,
) -> MessageResponse:
    await service.delete_task(task_id, owner_id)
    return MessageResponse(message="Task deleted")
