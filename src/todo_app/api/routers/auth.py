"""Routes handling user authentication flows."""

from __future__ import annotations

from fastapi import APIRouter, Response, status

from ...core.config import Settings
from ...deps import AuthServiceDependency, SessionUserIdDependency, SettingsDependency
from ...schemas import LoginRequest, LoginResponse, MessageResponse, RegisterRequest, UserPublic

router = APIRouter(prefix="/auth", tags=["auth"])


def _cookie_options(settings: Settings) -> dict[str, object]:
    return {
        "path": "/",
        "httponly": True,
        "secure": settings.cookie_secure,
        "samesite": settings.cookie_same_site,
    }


@router.post(
    "/register",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Register a new user account",
)
async def register(payload: RegisterRequest, auth_service: AuthServiceDependency) -> MessageResponse:
    await auth_service.register(
        username=payload.username,
        email=payload.email,
        password=payload.password,
    )
    return MessageResponse(message="User registered successfully")


@router.post(
    "/login",
    response_model=LoginResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    summary="Authenticate using email and password",
)
async def login(
    payload: LoginRequest,
    response: Response,
    settings: SettingsDependency,
    auth_service: AuthServiceDependency,
) -> LoginResponse:
    user = await auth_service.authenticate(email=payload.email, password=payload.password)
    session = auth_service.issue_session(user)

    if settings.session_transport == "cookie":
        response.set_cookie(
            settings.cookie_name,
            session.token,
            max_age=settings.session_ttl_seconds,
            **_cookie_options(settings),
        )
        return LoginResponse(message="Login successful")

    return LoginResponse(
        message="Login successful",
        token=session.token,
        token_type="bearer",
        expires_in=settings.session_ttl_seconds,
    )


@router.post(
    "/logout",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Clear the session credential",
)
async def logout(response: Response, settings: SettingsDependency) -> MessageResponse:
    """Expire the session cookie.

    Bearer tokens are discarded by the client; the server keeps no revocation
    list, so such a token stays valid until it expires.
    """
    if settings.session_transport == "cookie":
        response.delete_cookie(settings.cookie_name, **_cookie_options(settings))
    return MessageResponse(message="Logged out")


@router.get("/me", response_model=UserPublic, summary="Return the authenticated user")
async def read_current_user(
    user_id: SessionUserIdDependency,
    auth_service: AuthServiceDependency,
) -> UserPublic:
    user = await auth_service.get_current_user(user_id)
    return UserPublic.model_validate(user)
