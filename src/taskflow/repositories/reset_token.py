"""Repository for ResetToken entity (the Reset Token Store)."""

from datetime import datetime

from sqlalchemy import delete
from sqlmodel import select

from src.taskflow.models import ResetToken, User
from src.taskflow.repositories.base import BaseRepository


class ResetTokenRepository(BaseRepository[ResetToken]):
    """Repository for ResetToken entity."""

    model = ResetToken

    async def get_by_hash(self, token_hash: str) -> tuple[ResetToken, User] | None:
        """Get a reset token and its owning user by exact token hash."""
        result = await self.session.execute(
            select(ResetToken, User)
            .join(User, User.id == ResetToken.user_id)  # type: ignore[arg-type]
            .where(ResetToken.token_hash == token_hash)
        )
        row = result.first()
        if row is None:
            return None
        token, user = row
        return token, user

    async def delete_by_hash(self, token_hash: str) -> int:
        """Delete the token with this hash. Returns rows deleted (0 if already gone)."""
        result = await self.session.execute(
            delete(ResetToken).where(ResetToken.token_hash == token_hash)  # type: ignore[arg-type]
        )
        return result.rowcount or 0  # type: ignore[attr-defined]

    async def cleanup_expired(self, now: datetime) -> int:
        """Delete every token whose expiry is before ``now``.

        Idempotent: a second run finds nothing to delete.

        Returns:
            Number of tokens deleted
        """
        stmt = delete(ResetToken).where(ResetToken.expires_at < now)  # type: ignore[arg-type]
        result = await self.session.execute(stmt)
        return result.rowcount or 0  # type: ignore[attr-defined]
