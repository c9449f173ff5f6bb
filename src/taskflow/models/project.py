"""Project and project membership models."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from src.taskflow.models.base import utc_now
from src.taskflow.models.enums import ProjectRole

PROJECT_NAME_MAX_LENGTH = 25
PROJECT_DESCRIPTION_MAX_LENGTH = 500


class Project(SQLModel, table=True):
    """Project entity.

    Ownership is a UserProjectRole row with role OWNER, not a column here.
    """

    __tablename__ = "projects"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=PROJECT_NAME_MAX_LENGTH)
    description: str = Field(max_length=PROJECT_DESCRIPTION_MAX_LENGTH)
    created_at: datetime = Field(default_factory=utc_now, index=True)


class UserProjectRole(SQLModel, table=True):
    """A user's single role within a project."""

    __tablename__ = "user_project_roles"
    __table_args__ = (UniqueConstraint("user_id", "project_id", name="uq_user_project_role"),)

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="users.id", ondelete="CASCADE", index=True)
    project_id: UUID = Field(foreign_key="projects.id", ondelete="CASCADE", index=True)
    role: str = Field(default=ProjectRole.MEMBER.value, max_length=20)
    created_at: datetime = Field(default_factory=utc_now)
