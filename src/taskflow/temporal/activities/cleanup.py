"""Reset token cleanup activity."""

from temporalio import activity

from src.taskflow.core.db import get_session
from src.taskflow.repositories import ResetTokenRepository, UserRepository
from src.taskflow.services.reset_token_service import ResetTokenService


@activity.defn
async def cleanup_expired_reset_tokens() -> int:
    """
    Delete every reset token whose expiry has passed.

    Idempotent: a second run finds no matching records.

    Returns:
        Number of tokens deleted
    """
    activity.logger.info("Cleaning up expired reset tokens")

    async with get_session() as session:
        service = ResetTokenService(
            ResetTokenRepository(session), UserRepository(session), session
        )
        count = await service.delete_expired()

    activity.logger.info(f"Deleted {count} expired reset tokens")
    return count
