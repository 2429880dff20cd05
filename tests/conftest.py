from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from dataclasses import dataclass
from itertools import count
from typing import Any

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from todo_app.core.config import Settings
from todo_app.db import DocumentStore
from todo_app.main import create_app

_ISOLATED_ENV_VARS = (
    "ENVIRONMENT",
    "MONGO_URI",
    "MONGO_DATABASE",
    "JWT_SECRET",
    "JWT_ALGORITHM",
    "SESSION_TTL_MINUTES",
    "SESSION_TRANSPORT",
    "COOKIE_NAME",
    "COOKIE_SECURE",
    "COOKIE_SAME_SITE",
    "ALLOWED_ORIGINS",
    "CLIENT_ORIGIN",
    "LOG_LEVEL",
)


def build_settings(**overrides: Any) -> Settings:
    values: dict[str, Any] = {
        "environment": "test",
        "jwt_secret_key": "test-secret",
        "mongo_database": "todo_app_test",
        "_env_file": None,
    }
    values.update(overrides)
    return Settings(**values)


@dataclass(slots=True)
class RegisteredUser:
    username: str
    email: str
    password: str
    token: str | None = None

    @property
    def headers(self) -> dict[str, str]:
        if not self.token:
            raise RuntimeError("User has not logged in with the header transport.")
        return {"Authorization": f"Bearer {self.token}"}


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ISOLATED_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings() -> Settings:
    return build_settings()


@pytest_asyncio.fixture
async def store(settings: Settings) -> AsyncIterator[DocumentStore]:
    document_store = DocumentStore(settings, client=AsyncMongoMockClient())
    await document_store.connect()
    try:
        yield document_store
    finally:
        await document_store.close()


@pytest.fixture
def app(settings: Settings, store: DocumentStore) -> FastAPI:
    return create_app(settings, store=store)


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as http_client:
        yield http_client


@pytest.fixture
def header_settings() -> Settings:
    return build_settings(session_transport="header")


@pytest_asyncio.fixture
async def header_client(header_settings: Settings, store: DocumentStore) -> AsyncIterator[AsyncClient]:
    application = create_app(header_settings, store=store)
    async with AsyncClient(transport=ASGITransport(app=application), base_url="http://testserver") as http_client:
        yield http_client


@pytest.fixture
def register_user() -> Callable[..., Awaitable[RegisteredUser]]:
    counter = count()

    async def _factory(
        http_client: AsyncClient,
        *,
        username: str | None = None,
        email: str | None = None,
        password: str = "pw1",
        login: bool = True,
    ) -> RegisteredUser:
        index = next(counter)
        user = RegisteredUser(
            username=username or f"user{index}",
            email=email or f"user{index}@example.com",
            password=password,
        )
        response = await http_client.post(
            "/api/auth/register",
            json={"username": user.username, "email": user.email, "password": user.password},
        )
        assert response.status_code == 200, response.text
        if login:
            response = await http_client.post(
                "/api/auth/login",
                json={"email": user.email, "password": user.password},
            )
            assert response.status_code == 200, response.text
            user.token = response.json().get("token")
        return user

    return _factory
