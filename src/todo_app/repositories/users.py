"""Repository for interacting with user documents."""

from __future__ import annotations

from ..models import User
from .base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Concrete repository for ``User`` documents."""

    def __init__(self) -> None:
        super().__init__(User)

    async def get_by_email(self, email: str) -> User | None:
        """Return a user matching the supplied email if it exists."""
        return await User.find_one(User.email == email)

    async def get_by_username(self, username: str) -> User | None:
        return await User.find_one(User.username == username)
