"""Repository for interacting with task documents.

Every lookup here filters on ``owner_id`` inside the query itself, so a task
owned by someone else is indistinguishable from one that does not exist.
"""

from __future__ import annotations

from beanie import PydanticObjectId

from ..models import Task
from .base import BaseRepository


class TaskRepository(BaseRepository[Task]):
    """Concrete repository encapsulating ``Task`` persistence operations."""

    def __init__(self) -> None:
        super().__init__(Task)

    async def list_for_owner(self, owner_id: PydanticObjectId) -> list[Task]:
        """Return all tasks assigned to the given owner."""
        return await Task.find(Task.owner_id == owner_id).to_list()

    async def count_for_owner(self, owner_id: PydanticObjectId) -> int:
        return await Task.find(Task.owner_id == owner_id).count()

    async def get_for_owner(
        self,
        task_id: PydanticObjectId,
        owner_id: PydanticObjectId,
    ) -> Task | None:
        """Retrieve a task by id ensuring it belongs to the provided owner."""
        return await Task.find_one(Task.id == task_id, Task.owner_id == owner_id)

    async def delete_for_owner(
        self,
        task_id: PydanticObjectId,
        owner_id: PydanticObjectId,
    ) -> bool:
        """Atomically remove the owner's task, returning ``True`` iff one was removed."""
        collection = Task.get_motor_collection()
        removed = await collection.find_one_and_delete({"_id": task_id, "owner_id": owner_id})
        return removed is not None
