"""User documents stored through Beanie."""

from __future__ import annotations

from beanie import Indexed
from pydantic import Field

from .common import TimestampedDocument


class User(TimestampedDocument):
    """Persistent user account.

    ``username`` and ``email`` are each backed by a unique index.
    """

    username: Indexed(str, unique=True)  # type: ignore[valid-type]
    email: Indexed(str, unique=True)  # type: ignore[valid-type]
    hashed_password: str = Field(repr=False)

    class Settings:
        name = "users"


__all__ = ["User"]
