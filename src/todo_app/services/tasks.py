"""Service layer encapsulating owner-scoped task operations."""

from __future__ import annotations

import logging

from beanie import PydanticObjectId
from bson.errors import InvalidId

from ..errors import NotFoundError, ValidationError
from ..models import Task
from ..repositories import TaskRepository

logger = logging.getLogger(__name__)


def _parse_task_id(task_id: str | PydanticObjectId) -> PydanticObjectId:
    if isinstance(task_id, PydanticObjectId):
        return task_id
    try:
        return PydanticObjectId(task_id)
    except (InvalidId, TypeError) as exc:
        raise NotFoundError("Task not found") from exc


class TaskService:
    """High-level business orchestration for ``Task`` documents.

    Every method takes the caller's ``owner_id`` and never touches tasks
    belonging to anybody else.
    """

    def __init__(self) -> None:
        self._repository = TaskRepository()

    @property
    def repository(self) -> TaskRepository:
        return self._repository

    async def list_tasks(self, owner_id: PydanticObjectId) -> list[Task]:
        """Return all tasks assigned to ``owner_id``."""
        return await self._repository.list_for_owner(owner_id)

    async def create_task(
        self,
        *,
        owner_id: PydanticObjectId,
        title: str | None,
        description: str | None = None,
    ) -> Task:
        """Create a new task belonging to the specified owner."""
        if not title:
            raise ValidationError("Title required")
        task = Task(owner_id=owner_id, title=title, description=description)
        await self._repository.add(task)
        logger.debug("Task created", extra={"task_id": str(task.id)})
        return task

    async def update_task(
        self,
        task_id: str | PydanticObjectId,
        owner_id: PydanticObjectId,
        *,
        title: str | None = None,
        description: str | None = None,
    ) -> Task:
        """Apply a partial update to one of the owner's tasks.

        Falsy values count as "not supplied", so an empty string leaves the
        stored value untouched and a description can never be cleared.
        ``updated_at`` only moves when a stored value actually changes.
        """
        task = await self._repository.get_for_owner(_parse_task_id(task_id), owner_id)
        if task is None:
            raise NotFoundError("Task not found")
        changed = False
        if title and title != task.title:
            task.title = title
            changed = True
        if description and description != task.description:
            task.description = description
            changed = True
        if changed:
            task.touch()
            await self._repository.save(task)
        return task

    async def delete_task(self, task_id: str | PydanticObjectId, owner_id: PydanticObjectId) -> None:
        """Delete one of the owner's tasks or raise ``NotFoundError``."""
        deleted = await self._repository.delete_for_owner(_parse_task_id(task_id), owner_id)
        if not deleted:
            raise NotFoundError("Task not found")
        logger.debug("Task deleted", extra={"task_id": str(task_id)})


__all__ = ["TaskService"]
