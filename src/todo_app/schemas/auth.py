"""Schemas describing authentication payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from .system import MessageResponse


class RegisterRequest(BaseModel):
    """Incoming payload for registering a new user.

    Fields are optional at the schema level so that an absent field reaches
    the service and is reported as ``All fields required``.
    """

    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={
            "example": {"username": "amy", "email": "amy@example.com", "password": "pw1"}
        },
    )

    username: str | None = None
    email: EmailStr | None = None
    password: str | None = None

    @field_validator("email", mode="before")
    @classmethod
    def _empty_email_as_missing(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class LoginRequest(BaseModel):
    """Credentials submitted to the login endpoint."""

    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={"example": {"email": "amy@example.com", "password": "pw1"}},
    )

    email: str | None = None
    password: str | None = None


class LoginResponse(MessageResponse):
    """Login acknowledgement.

    ``token`` is only populated when sessions travel as bearer headers; the
    cookie transport never exposes the token to client code.
    """

    token: str | None = None
    token_type: str | None = None
    expires_in: int | None = None


class TokenPayload(BaseModel):
    """Validated JWT payload."""

    model_config = ConfigDict(extra="ignore")

    sub: str = Field(min_length=1)
    exp: datetime
    iat: datetime
    jti: str


__all__ = ["LoginRequest", "LoginResponse", "RegisterRequest", "TokenPayload"]
