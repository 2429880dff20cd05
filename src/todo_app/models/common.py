"""Shared document base classes and utilities."""

from __future__ import annotations

from datetime import datetime, timezone

from beanie import Document
from pydantic import Field


def utcnow() -> datetime:
    """Return a timezone-aware UTC timestamp."""
    return datetime.now(timezone.utc)


class TimestampedDocument(Document):
    """Document base providing created/updated timestamps."""

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    def touch(self) -> None:
        """Mark the document as modified now."""
        self.updated_at = utcnow()


__all__ = ["TimestampedDocument", "utcnow"]
