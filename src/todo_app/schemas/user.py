"""User-facing Pydantic schemas."""

from __future__ import annotations

from datetime import datetime

from beanie import PydanticObjectId
from pydantic import BaseModel, ConfigDict, Field


class UserPublic(BaseModel):
    """Public representation of a user; the password hash is never included."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: PydanticObjectId = Field(alias="_id")
    username: str
    email: str
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")


__all__ = ["UserPublic"]
