"""Project schemas for API request/response."""

from datetime import datetime
from uuid import UUID

from pydantic import Field, field_validator

from src.taskflow.models.enums import ProjectRole
from src.taskflow.models.project import PROJECT_DESCRIPTION_MAX_LENGTH, PROJECT_NAME_MAX_LENGTH
from src.taskflow.schemas.base import ApiModel
from src.taskflow.schemas.user import UserRead


class ProjectCreate(ApiModel):
    name: str | None = Field(default=None, max_length=PROJECT_NAME_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=PROJECT_DESCRIPTION_MAX_LENGTH)

    @field_validator("name", "description")
    @classmethod
    def strip_blank(cls, v: str | None) -> str | None:
        if v is not None:
            v = v.strip()
        return v or None

    def missing_fields(self) -> list[str]:
        return [name for name in ("name", "description") if not getattr(self, name)]


class ProjectUpdate(ApiModel):
    name: str | None = Field(default=None, min_length=1, max_length=PROJECT_NAME_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=PROJECT_DESCRIPTION_MAX_LENGTH)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        if v is not None:
            v = v.strip()
            if not v:
                raise ValueError("Project name cannot be empty or whitespace only")
        return v


class MemberAssign(ApiModel):
    user_id: UUID
    role: ProjectRole = ProjectRole.MEMBER


class ProjectRead(ApiModel):
    id: UUID
    name: str
    description: str
    created_at: datetime


class ProjectMemberRead(ApiModel):
    user: UserRead
    role: str


class ProjectDetailRead(ProjectRead):
    """Project with its owner and remaining members, ordered by role."""

    owner: UserRead | None
    members: list[ProjectMemberRead]
