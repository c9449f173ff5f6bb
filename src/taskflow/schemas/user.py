from datetime import datetime
from uuid import UUID

from pydantic import field_validator

from src.taskflow.models.enums import GlobalRole
from src.taskflow.schemas.base import ApiModel


class UserRead(ApiModel):
    """Public profile. Never carries credentials or privilege flags."""

    id: UUID
    firstname: str
    lastname: str
    email: str
    created_at: datetime


class UserDetailRead(UserRead):
    """Full account view for administrators and internal callers (still password-free)."""

    email_verified: bool
    global_role: GlobalRole

    @field_validator("global_role", mode="before")
    @classmethod
    def coerce_role(cls, v: object) -> GlobalRole:
        return GlobalRole(v)
