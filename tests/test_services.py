from __future__ import annotations

import pytest
from beanie import PydanticObjectId

from todo_app.core.config import Settings
from todo_app.core.security import verify_password
from todo_app.db import DocumentStore
from todo_app.errors import (
    ConflictError,
    InvalidCredentialsError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from todo_app.services import AuthService, TaskService

pytestmark = pytest.mark.asyncio


@pytest.fixture
def auth_service(settings: Settings, store: DocumentStore) -> AuthService:
    return AuthService(settings)


@pytest.fixture
def task_service(store: DocumentStore) -> TaskService:
    return TaskService()


async def test_register_stores_salted_hash(auth_service: AuthService) -> None:
    first = await auth_service.register(username="amy", email="amy@x.com", password="pw1")
    second = await auth_service.register(username="bob", email="bob@x.com", password="pw1")

    assert first.id is not None
    assert first.hashed_password != "pw1"
    assert first.hashed_password != second.hashed_password
    assert verify_password("pw1", first.hashed_password)


async def test_register_rejects_duplicates_and_blanks(auth_service: AuthService) -> None:
    await auth_service.register(username="amy", email="amy@x.com", password="pw1")

    with pytest.raises(ConflictError):
        await auth_service.register(username="other", email="AMY@x.com", password="pw2")
    with pytest.raises(ConflictError):
        await auth_service.register(username="amy", email="new@x.com", password="pw2")
    with pytest.raises(ValidationError):
        await auth_service.register(username="amy", email="amy@x.com", password="")


async def test_authenticate_and_validate_session(auth_service: AuthService) -> None:
    user = await auth_service.register(username="amy", email="amy@x.com", password="pw1")

    authenticated = await auth_service.authenticate(email="amy@x.com", password="pw1")
    assert authenticated.id == user.id

    session = auth_service.issue_session(authenticated)
    assert auth_service.validate_session(session.token) == user.id

    with pytest.raises(InvalidCredentialsError):
        await auth_service.authenticate(email="amy@x.com", password="nope")
    with pytest.raises(InvalidCredentialsError):
        await auth_service.authenticate(email=None, password="pw1")
    with pytest.raises(UnauthorizedError):
        auth_service.validate_session(None)


async def test_session_signed_with_another_secret_is_rejected(
    auth_service: AuthService,
    settings: Settings,
) -> None:
    user = await auth_service.register(username="amy", email="amy@x.com", password="pw1")
    other = AuthService(settings.model_copy(update={"jwt_secret_key": "rotated"}))

    token = other.issue_session(user).token

    with pytest.raises(UnauthorizedError, match="Invalid token"):
        auth_service.validate_session(token)


async def test_get_current_user_unknown_id(auth_service: AuthService) -> None:
    with pytest.raises(NotFoundError):
        await auth_service.get_current_user(PydanticObjectId())


async def test_task_operations_are_owner_scoped(task_service: TaskService) -> None:
    owner = PydanticObjectId()
    stranger = PydanticObjectId()

    task = await task_service.create_task(owner_id=owner, title="Buy milk")
    assert task.id is not None
    assert task.description is None
    assert task.created_at <= task.updated_at

    assert await task_service.list_tasks(stranger) == []
    with pytest.raises(NotFoundError):
        await task_service.update_task(task.id, stranger, title="Mine now")
    with pytest.raises(NotFoundError):
        await task_service.delete_task(str(task.id), stranger)

    updated = await task_service.update_task(str(task.id), owner, description="2%")
    assert updated.title == "Buy milk"
    assert updated.description == "2%"

    await task_service.delete_task(task.id, owner)
    assert await task_service.list_tasks(owner) == []
    assert await task_service.repository.count_for_owner(owner) == 0


async def test_create_task_requires_title(task_service: TaskService) -> None:
    owner = PydanticObjectId()

    with pytest.raises(ValidationError, match="Title required"):
        await task_service.create_task(owner_id=owner, title="")

    assert await task_service.repository.count_for_owner(owner) == 0


async def test_list_tasks_keeps_insertion_order(task_service: TaskService) -> None:
    owner = PydanticObjectId()
    titles = ["first", "second", "third"]
    for title in titles:
        await task_service.create_task(owner_id=owner, title=title)

    tasks = await task_service.list_tasks(owner)

    assert [task.title for task in tasks] == titles


async def test_update_without_changes_keeps_timestamp(task_service: TaskService) -> None:
    owner = PydanticObjectId()
    task = await task_service.create_task(owner_id=owner, title="Buy milk", description="2%")
    before = await task_service.repository.get(task.id)

    await task_service.update_task(task.id, owner)
    await task_service.update_task(task.id, owner, title="", description="")
    await task_service.update_task(task.id, owner, title="Buy milk", description="2%")

    after = await task_service.repository.get(task.id)
    assert after.updated_at == before.updated_at

    changed = await task_service.update_task(task.id, owner, title="Buy oat milk")
    assert changed.title == "Buy oat milk"
    assert changed.updated_at != before.updated_at
