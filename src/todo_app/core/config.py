"""Application settings powered by ``pydantic-settings``."""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated, Any, Literal, Sequence

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

try:
    from .. import __version__ as package_version
except ImportError:  # pragma: no cover - fallback during early bootstrapping
    package_version = "0.1.0"

EnvironmentName = Literal["development", "test", "production"]
SessionTransport = Literal["cookie", "header"]
# Read verbatim from the environment; split on commas by the validator below.
CommaSeparatedList = Annotated[list[str], NoDecode]

_ENVIRONMENT_ALIASES: dict[str, EnvironmentName] = {
    "development": "development",
    "dev": "development",
    "test": "test",
    "testing": "test",
    "production": "production",
    "prod": "production",
}

_ENVIRONMENT_PROFILES: dict[EnvironmentName, dict[str, Any]] = {
    "development": {
        "log_level": "DEBUG",
        "reload": True,
        "cookie_secure": False,
        "cookie_same_site": "lax",
    },
    "test": {
        "log_level": "WARNING",
        "reload": False,
        "cookie_secure": False,
        "cookie_same_site": "lax",
    },
    # Cross-site cookies require SameSite=None, which browsers only accept with Secure.
    "production": {
        "log_level": "INFO",
        "reload": False,
        "cookie_secure": True,
        "cookie_same_site": "none",
    },
}


class Settings(BaseSettings):
    """Runtime configuration for the to-do API."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    project_name: str = "Todo API"
    environment: EnvironmentName = Field(default="development", alias="ENVIRONMENT")
    api_prefix: str = Field(default="/api", alias="API_PREFIX")
    version: str = Field(default=package_version, alias="VERSION")
    app_host: str = Field(default="0.0.0.0", alias="APP_HOST")
    app_port: int = Field(default=4000, alias="PORT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    reload: bool = Field(default=True, alias="RELOAD")

    mongo_uri: str | None = Field(default=None, alias="MONGO_URI")
    mongo_database: str = Field(default="todo_app", alias="MONGO_DATABASE")
    store_timeout_ms: int = Field(default=5000, alias="STORE_TIMEOUT_MS")

    cors_allow_origins: CommaSeparatedList = Field(
        default_factory=lambda: ["http://localhost:5173"],
        alias="ALLOWED_ORIGINS",
    )
    client_origin: str | None = Field(default=None, alias="CLIENT_ORIGIN")
    cors_allow_credentials: bool = Field(default=True, alias="ALLOW_CREDENTIALS")
    cors_allow_methods: CommaSeparatedList = Field(default_factory=lambda: ["*"], alias="ALLOW_METHODS")
    cors_allow_headers: CommaSeparatedList = Field(default_factory=lambda: ["*"], alias="ALLOW_HEADERS")

    jwt_secret_key: str = Field(default="change-me", alias="JWT_SECRET")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    session_ttl_minutes: int = Field(default=60 * 24, alias="SESSION_TTL_MINUTES")
    session_transport: SessionTransport = Field(default="cookie", alias="SESSION_TRANSPORT")
    cookie_name: str = Field(default="token", alias="COOKIE_NAME")
    cookie_secure: bool = Field(default=True, alias="COOKIE_SECURE")
    cookie_same_site: str = Field(default="none", alias="COOKIE_SAME_SITE")

    @field_validator("environment", mode="before")
    @classmethod
    def _normalise_environment(cls, value: object) -> EnvironmentName:
        if isinstance(value, str):
            normalized = value.strip().lower()
        else:
            normalized = ""
        if not normalized:
            normalized = "development"
        mapped = _ENVIRONMENT_ALIASES.get(normalized)
        if mapped is not None:
            return mapped
        return "development"

    @field_validator("session_transport", mode="before")
    @classmethod
    def _normalise_transport(cls, value: object) -> str:
        if not isinstance(value, str):
            return "cookie"
        return value.strip().lower()

    @field_validator(
        "cors_allow_origins",
        "cors_allow_methods",
        "cors_allow_headers",
        mode="before",
    )
    @classmethod
    def _coerce_comma_separated(cls, value: object) -> list[str]:
        """Allow comma separated strings for CORS configuration."""

        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        if isinstance(value, Sequence):
            return [str(item) for item in value if str(item).strip()]
        return []

    @field_validator("mongo_uri", "client_origin", mode="before")
    @classmethod
    def _blank_as_missing(cls, value: object) -> str | None:
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    @field_validator("store_timeout_ms", mode="before")
    @classmethod
    def _ensure_positive_timeout(cls, value: object) -> int:
        try:
            timeout = int(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return 5000
        return max(timeout, 1)

    @field_validator("session_ttl_minutes", mode="before")
    @classmethod
    def _ensure_non_negative_ttl(cls, value: object) -> int:
        try:
            ttl = int(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return 60 * 24
        return max(ttl, 0)

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalise_log_level(cls, value: object) -> str:
        if not isinstance(value, str):
            return "INFO"
        return value.upper()

    @field_validator("cookie_same_site", mode="before")
    @classmethod
    def _normalize_same_site(cls, value: object) -> str:
        if not isinstance(value, str):
            return "lax"
        normalized = value.lower()
        if normalized not in {"lax", "strict", "none"}:
            return "lax"
        return normalized

    @model_validator(mode="after")
    def _apply_environment_profile(self) -> "Settings":
        profile = _ENVIRONMENT_PROFILES[self.environment]
        fields_set = set(getattr(self, "model_fields_set", set()))
        for field_name, value in profile.items():
            if field_name not in fields_set:
                setattr(self, field_name, value)
        return self

    @model_validator(mode="after")
    def _include_client_origin(self) -> "Settings":
        if self.client_origin and self.client_origin not in self.cors_allow_origins:
            self.cors_allow_origins = [*self.cors_allow_origins, self.client_origin]
        return self

    @property
    def session_ttl_seconds(self) -> int:
        return self.session_ttl_minutes * 60


@lru_cache()
def get_settings() -> Settings:
    """Return a cached ``Settings`` instance."""

    return Settings()


__all__ = ["EnvironmentName", "SessionTransport", "Settings", "get_settings"]
