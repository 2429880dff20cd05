"""Pydantic schemas for public interfaces."""

from __future__ import annotations

from .auth import LoginRequest, LoginResponse, RegisterRequest, TokenPayload
from .system import ErrorResponse, MessageResponse
from .task import TaskCreate, TaskRead, TaskUpdate
from .user import UserPublic

__all__ = [
    "ErrorResponse",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "RegisterRequest",
    "TaskCreate",
    "TaskRead",
    "TaskUpdate",
    "TokenPayload",
    "UserPublic",
]
