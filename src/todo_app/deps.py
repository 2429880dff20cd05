"""Reusable FastAPI dependencies."""

from __future__ import annotations

from typing import Annotated

from beanie import PydanticObjectId
from fastapi import Depends, Request
from fastapi.security.utils import get_authorization_scheme_param

from .core.config import Settings
from .core.context import bind_user
from .services import AuthService, TaskService


def get_app_settings(request: Request) -> Settings:
    """Return the settings object the application was built with."""

    return request.app.state.settings


SettingsDependency = Annotated[Settings, Depends(get_app_settings)]


def get_auth_service(settings: SettingsDependency) -> AuthService:
    return AuthService(settings)


def get_task_service() -> TaskService:
    return TaskService()


AuthServiceDependency = Annotated[AuthService, Depends(get_auth_service)]
TaskServiceDependency = Annotated[TaskService, Depends(get_task_service)]


def extract_session_token(request: Request, settings: Settings) -> str | None:
    """Read the session token from the configured transport only."""

    if settings.session_transport == "cookie":
        return request.cookies.get(settings.cookie_name) or None
    scheme, credentials = get_authorization_scheme_param(request.headers.get("Authorization"))
    if scheme.lower() != "bearer":
        return None
    return credentials or None


async def require_session(
    request: Request,
    settings: SettingsDependency,
    auth_service: AuthServiceDependency,
) -> PydanticObjectId:
    """Guard protected routes.

    The session's user id is stored on ``request.state`` and on the logging
    context, so later log lines for this request name the user.
    """

    token = extract_session_token(request, settings)
    user_id = auth_service.validate_session(token)
    request.state.user_id = user_id
    bind_user(user_id)
    return user_id


SessionUserIdDependency = Annotated[PydanticObjectId, Depends(require_session)]


__all__ = [
    "AuthServiceDependency",
    "SessionUserIdDependency",
    "SettingsDependency",
    "TaskServiceDependency",
    "extract_session_token",
    "get_app_settings",
    "require_session",
]
