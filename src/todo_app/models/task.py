"""Task documents stored through Beanie."""

from __future__ import annotations

from beanie import Indexed, PydanticObjectId
from pydantic import Field

from .common import TimestampedDocument


class Task(TimestampedDocument):
    """Persistent task owned by exactly one user."""

    owner_id: Indexed(PydanticObjectId)  # type: ignore[valid-type]
    title: str = Field(min_length=1)
    description: str | None = None

    class Settings:
        name = "tasks"


__all__ = ["Task"]
