"""Authentication service encapsulating registration and session flows."""

from __future__ import annotations

import logging

from beanie import PydanticObjectId
from bson.errors import InvalidId
from pydantic import ValidationError as PydanticValidationError
from pymongo.errors import DuplicateKeyError

from ..core.config import Settings
from ..core.security import (
    ExpiredSignatureError,
    GeneratedToken,
    JWTError,
    create_session_token,
    decode_token,
    get_password_hash,
    verify_password,
)
from ..errors import (
    ConflictError,
    InvalidCredentialsError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from ..models import User
from ..repositories import UserRepository
from ..schemas.auth import TokenPayload

logger = logging.getLogger(__name__)


def normalise_email(email: str) -> str:
    return email.strip().lower()


class AuthService:
    """High-level authentication workflows."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._repository = UserRepository()

    async def register(
        self,
        *,
        username: str | None,
        email: str | None,
        password: str | None,
    ) -> User:
        """Create a new account; no session is issued."""
        if not username or not email or not password:
            raise ValidationError("All fields required")

        email = normalise_email(email)
        if await self._repository.get_by_email(email) is not None:
            raise ConflictError("Email already used")
        if await self._repository.get_by_username(username) is not None:
            raise ConflictError("Username already taken")

        user = User(
            username=username,
            email=email,
            hashed_password=get_password_hash(password),
        )
        try:
            await self._repository.add(user)
        except DuplicateKeyError as exc:
            # Lost a race against a concurrent registration.
            raise ConflictError("Email or username already used") from exc
        logger.info("User registered", extra={"user_id": str(user.id)})
        return user

    async def authenticate(self, *, email: str | None, password: str | None) -> User:
        """Return the user owning these credentials or raise ``InvalidCredentialsError``."""
        if not email or not password:
            raise InvalidCredentialsError()
        user = await self._repository.get_by_email(normalise_email(email))
        if user is None:
            raise InvalidCredentialsError()
        if not verify_password(password, user.hashed_password):
            raise InvalidCredentialsError()
        return user

    def issue_session(self, user: User) -> GeneratedToken:
        if user.id is None:
            raise ValueError("User must be persisted before issuing a session.")
        return create_session_token(subject=str(user.id), settings=self._settings)

    def validate_session(self, token: str | None) -> PydanticObjectId:
        """Verify signature and expiry of ``token`` and return the bound user id.

        Validation is stateless: nothing is looked up in the store.
        """
        if not token:
            raise UnauthorizedError("Unauthorized")
        try:
            raw_payload = decode_token(
                token=token,
                secret=self._settings.jwt_secret_key,
                algorithm=self._settings.jwt_algorithm,
            )
            payload = TokenPayload.model_validate(raw_payload)
            return PydanticObjectId(payload.sub)
        except ExpiredSignatureError as exc:
            logger.info("Rejected expired session token")
            raise UnauthorizedError("Invalid token") from exc
        except (JWTError, PydanticValidationError, InvalidId, TypeError) as exc:
            raise UnauthorizedError("Invalid token") from exc

    async def get_current_user(self, user_id: PydanticObjectId) -> User:
        user = await self._repository.get(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user


__all__ = ["AuthService", "normalise_email"]
