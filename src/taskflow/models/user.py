"""User model."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.taskflow.models.base import utc_now
from src.taskflow.models.enums import GlobalRole


class User(SQLModel, table=True):
    """Registered account. Email is unique and compared exactly as stored."""

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    firstname: str = Field(max_length=100)
    lastname: str = Field(max_length=100)
    email: str = Field(max_length=255, unique=True, index=True)
    hashed_password: str = Field(max_length=255)
    email_verified: bool = Field(default=False)
    global_role: str = Field(default=GlobalRole.REGULAR_USER.value, max_length=50)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def role(self) -> GlobalRole:
        return GlobalRole(self.global_role)
