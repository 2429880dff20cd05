"""Domain documents exposed for the to-do API."""

from __future__ import annotations

from .common import TimestampedDocument, utcnow
from .task import Task
from .user import User

DOCUMENT_MODELS = [User, Task]

__all__ = ["DOCUMENT_MODELS", "Task", "TimestampedDocument", "User", "utcnow"]
