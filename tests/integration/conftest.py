"""Integration test fixtures for database and HTTP client operations.

The app runs against an in-memory SQLite database shared through a
StaticPool, so every session in a test sees the same data.
"""

from collections.abc import AsyncGenerator, Awaitable, Callable, Generator
from dataclasses import dataclass
from typing import Any
from unittest.mock import MagicMock, patch

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from src.taskflow.core import db
from src.taskflow.core import redis as redis_core
from src.taskflow.main import create_app
from src.taskflow.models import ProjectRole, User
from tests.factories import ProjectFactory, UserFactory, UserProjectRoleFactory

@pytest.fixture(autouse=True)
async def _reset_redis_between_tests() -> AsyncGenerator[None]:
    """Redis clients hold references to their event loop; never reuse one across tests."""
    redis_core.reset_redis_state()
    yield
    await redis_core.close_redis()


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine]:
    """Fresh in-memory database with every table created."""
    await db.dispose_engine()
    test_engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    db.set_engine(test_engine)
    yield test_engine
    db.set_engine(None)
    await test_engine.dispose()


@dataclass
class SentEmails:
    """Captured calls to the email senders: (to, user_id, token, user_name)."""

    verification: MagicMock
    reset: MagicMock

    def last_verification_token(self) -> str:
        return self.verification.call_args[0][2]

    def last_reset_token(self) -> str:
        return self.reset.call_args[0][2]


@pytest.fixture(autouse=True)
def sent_emails() -> Generator[SentEmails]:
    """Replace email delivery; tests read the links' tokens from the captured calls."""
    with (
        patch(
            "src.taskflow.services.account_service.send_verification_email", return_value=True
        ) as verification,
        patch(
            "src.taskflow.services.account_service.send_reset_password_email", return_value=True
        ) as reset,
    ):
        yield SentEmails(verification=verification, reset=reset)


@pytest.fixture
async def client(engine: AsyncEngine) -> AsyncGenerator[AsyncClient]:
    """Create test client bound to the in-memory database."""
    app = create_app()
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


async def _persist(engine: AsyncEngine, *entities: Any) -> None:
    async with db.get_session(engine) as session:
        session.add_all(entities)
        await session.commit()


@pytest.fixture
def create_user(engine: AsyncEngine) -> Callable[..., Awaitable[User]]:
    """Factory fixture that stores a user (verified regular user by default)."""

    async def _create_user(**kwargs: Any) -> User:
        user = UserFactory.build(**kwargs)
        await _persist(engine, user)
        return user

    return _create_user


@pytest.fixture
def create_project(engine: AsyncEngine) -> Callable[..., Awaitable[Any]]:
    """Factory fixture that stores a project owned by ``owner`` with extra members.

    ``members`` pairs each extra user with their ProjectRole.
    """

    async def _create_project(
        owner: User, members: list[tuple[User, ProjectRole]] | None = None, **kwargs: Any
    ):
        project = ProjectFactory.build(**kwargs)
        rows: list[Any] = [
            project,
            UserProjectRoleFactory.owner(user_id=owner.id, project_id=project.id),
        ]
        for user, role in members or []:
            rows.append(
                UserProjectRoleFactory.build(
                    user_id=user.id, project_id=project.id, role=role.value
                )
            )
        await _persist(engine, *rows)
        return project

    return _create_project

