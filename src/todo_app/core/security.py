"""Security helpers for password hashing and JWT session tokens."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import uuid4

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from .config import Settings

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=10)


@dataclass(slots=True)
class GeneratedToken:
    """Represents a generated JWT token with associated metadata."""

    token: str
    expires_at: datetime
    jti: str


def get_password_hash(password: str) -> str:
    """Return a salted hash of ``password``."""

    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against its hashed counterpart."""

    return pwd_context.verify(plain_password, hashed_password)


def create_session_token(
    *,
    subject: str,
    settings: Settings,
    expires_delta: timedelta | None = None,
) -> GeneratedToken:
    """Create a signed session token binding ``subject`` until expiry."""

    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.session_ttl_minutes)
    expire = now + expires_delta
    payload: dict[str, Any] = {
        "sub": str(subject),
        "iat": now,
        "exp": expire,
        "jti": uuid4().hex,
    }
    token = jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)
    return GeneratedToken(token=token, expires_at=expire, jti=payload["jti"])


def decode_token(*, token: str, secret: str, algorithm: str) -> dict[str, Any]:
    """Decode a JWT token and return its payload.

    Raises ``JWTError`` (or its ``ExpiredSignatureError`` subclass) when the
    signature does not verify or the token has expired.
    """

    return jwt.decode(token, secret, algorithms=[algorithm])


__all__ = [
    "ExpiredSignatureError",
    "GeneratedToken",
    "JWTError",
    "create_session_token",
    "decode_token",
    "get_password_hash",
    "verify_password",
]
