"""Task-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime

from beanie import PydanticObjectId
from pydantic import BaseModel, ConfigDict, Field

TASK_READ_EXAMPLE = {
    "_id": "66f1c2a9e4b0a1b2c3d4e5f6",
    "userId": "66f1c29be4b0a1b2c3d4e5f0",
    "title": "Write report",
    "description": "Quarterly numbers",
    "createdAt": "2024-01-01T12:00:00Z",
    "updatedAt": "2024-01-02T08:30:00Z",
}


class TaskCreate(BaseModel):
    """Payload for creating a new task."""

    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={
            "example": {"title": "Write report", "description": "Quarterly numbers"}
        },
    )

    title: str | None = None
    description: str | None = None


class TaskUpdate(BaseModel):
    """Payload for partially updating an existing task.

    Empty strings are accepted here and ignored by the service, exactly like
    omitted fields.
    """

    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={"example": {"description": "2%"}},
    )

    title: str | None = None
    description: str | None = None


class TaskRead(BaseModel):
    """Public representation of a task."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        json_schema_extra={"example": TASK_READ_EXAMPLE},
    )

    id: PydanticObjectId = Field(alias="_id")
    owner_id: PydanticObjectId = Field(alias="userId")
    title: str
    description: str | None = None
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")


__all__ = ["TaskCreate", "TaskRead", "TaskUpdate"]
