"""Test helper functions for common HTTP and data patterns."""

from uuid import UUID

from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlmodel import func, select

from src.taskflow.core.db import get_session
from src.taskflow.models import ResetToken, User
from src.taskflow.repositories import UserRepository
from tests.factories import DEFAULT_TEST_PASSWORD

REGISTRATION = {
    "firstname": "James",
    "lastname": "Smith",
    "email": "james.smith@example.com",
    "password": "P@ss1",
    "passwordConfirmation": "P@ss1",
}


async def login(client: AsyncClient, email: str, password: str = DEFAULT_TEST_PASSWORD) -> None:
    """Sign in as ``email``, replacing any session the client already holds."""
    client.cookies.clear()
    response = await client.post(
        "/api/v1/auth/login", json={"email": email, "password": password}
    )
    assert response.status_code == 201, response.json()


async def load_user(engine: AsyncEngine, user_id: UUID) -> User | None:
    """Read a user straight from the database."""
    async with get_session(engine) as session:
        return await UserRepository(session).get_by_id(user_id)


async def count_reset_tokens(engine: AsyncEngine, user_id: UUID) -> int:
    """Number of outstanding reset tokens for a user."""
    async with get_session(engine) as session:
        result = await session.execute(
            select(func.count()).select_from(ResetToken).where(ResetToken.user_id == user_id)
        )
        return result.scalar_one()
