"""Repository for User entity (the Account Store)."""

from uuid import UUID

from sqlalchemy import delete
from sqlmodel import select

from src.taskflow.models import ResetToken, User, UserProjectRole
from src.taskflow.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for User entity."""

    model = User

    async def get_by_email(self, email: str) -> User | None:
        """Get user by email address, matched exactly as stored."""
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def exists_by_email(self, email: str) -> bool:
        """Check if a user with the given email exists."""
        user = await self.get_by_email(email)
        return user is not None

    async def list_all(self) -> list[User]:
        """List every user, oldest first."""
        result = await self.session.execute(select(User).order_by(User.created_at))
        return list(result.scalars().all())

    async def delete_with_dependents(self, user_id: UUID) -> int:
        """Delete a user together with their reset tokens and project roles.

        The foreign keys cascade on PostgreSQL; the explicit deletes keep the
        behaviour identical on engines that do not enforce them.

        Returns the number of user rows deleted (0 or 1).
        """
        await self.session.execute(delete(ResetToken).where(ResetToken.user_id == user_id))
        await self.session.execute(
            delete(UserProjectRole).where(UserProjectRole.user_id == user_id)
        )
        result = await self.session.execute(delete(User).where(User.id == user_id))
        return result.rowcount or 0  # type: ignore[attr-defined]
