"""Credential reset token storage."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.taskflow.models.base import utc_now


class ResetToken(SQLModel, table=True):
    """Outstanding password reset token.

    Only the SHA-256 digest of the signed token is stored. A user may hold
    several outstanding tokens at once.
    """

    __tablename__ = "reset_tokens"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="users.id", ondelete="CASCADE", index=True)
    token_hash: str = Field(max_length=255, unique=True, index=True)
    created_at: datetime = Field(default_factory=utc_now)
    expires_at: datetime = Field(index=True)
