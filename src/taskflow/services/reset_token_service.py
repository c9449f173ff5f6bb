"""Credential reset tokens - issue, look up, validate, consume and sweep.

Token lifecycle: issued -> validated and consumed, or expired and swept.
Several tokens may be outstanding for the same user at once.
"""

from typing import NamedTuple
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.taskflow.core.exceptions import InternalError, NotFoundError
from src.taskflow.core.logging import get_logger
from src.taskflow.core.security import create_reset_token, hash_token
from src.taskflow.models import ResetToken, User
from src.taskflow.models.base import utc_now
from src.taskflow.repositories import ResetTokenRepository, UserRepository

logger = get_logger(__name__)


class ResetTokenMatch(NamedTuple):
    """A stored reset token together with its owning user."""

    token: ResetToken
    user: User


class ResetTokenService:
    """Reset token store operations. Raw tokens are never persisted or logged."""

    def __init__(
        self,
        reset_token_repo: ResetTokenRepository,
        user_repo: UserRepository,
        session: AsyncSession,
    ):
        self.reset_token_repo = reset_token_repo
        self.user_repo = user_repo
        self.session = session

    async def create_reset_token(self, user_id: UUID) -> str:
        """Issue a reset token for ``user_id`` and return the raw token string.

        The stored row expires together with the signed token.

        Raises:
            NotFoundError: the user does not exist
            InternalError: the token could not be stored
        """
        context = "ResetTokenService.create_reset_token"
        try:
            user = await self.user_repo.get_by_id(user_id)
            if user is None:
                raise NotFoundError()

            created_at = utc_now()
            token, expires_at = create_reset_token(user.id, user.email)
            self.reset_token_repo.add(
                ResetToken(
                    user_id=user.id,
                    token_hash=hash_token(token),
                    created_at=created_at,
                    expires_at=expires_at,
                )
            )
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(
                "Failed to store reset token",
                context=context,
                user_id=str(user_id),
                exc_info=e,
            )
            raise InternalError() from e

        logger.info("Reset token issued", context=context, user_id=str(user_id))
        return token

    async def find_by_token(self, token: str) -> ResetTokenMatch | None:
        """Look up a token by exact match, with its user loaded."""
        row = await self.reset_token_repo.get_by_hash(hash_token(token))
        if row is None:
            return None
        return ResetTokenMatch(*row)

    async def validate_reset_token(self, token: str) -> bool:
        """True only if the token exists and has not expired. Never mutates state."""
        try:
            match = await self.find_by_token(token)
        except SQLAlchemyError as e:
            logger.error(
                "Reset token lookup failed",
                context="ResetTokenService.validate_reset_token",
                exc_info=e,
            )
            raise InternalError() from e
        if match is None:
            return False
        return match.token.expires_at >= utc_now()

    async def invalidate_reset_token(self, token: str) -> None:
        """Delete the token row and commit the current transaction.

        A token already removed by a concurrent reset is a no-op.
        """
        context = "ResetTokenService.invalidate_reset_token"
        try:
            deleted = await self.reset_token_repo.delete_by_hash(hash_token(token))
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("Failed to invalidate reset token", context=context, exc_info=e)
            raise InternalError() from e
        if not deleted:
            logger.info("Reset token already invalidated", context=context)

    async def delete_expired(self) -> int:
        """Remove every token whose expiry has passed. Returns the count removed."""
        context = "ResetTokenService.delete_expired"
        try:
            count = await self.reset_token_repo.cleanup_expired(utc_now())
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("Failed to remove expired reset tokens", context=context, exc_info=e)
            raise InternalError() from e
        logger.info(
            "Expired reset tokens removed",
            context="ResetTokenService.delete_expired",
            count=count,
        )
        return count
