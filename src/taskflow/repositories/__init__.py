"""Repository layer - data access abstraction."""

from src.taskflow.repositories.base import BaseRepository
from src.taskflow.repositories.project import ProjectRepository, ProjectRoleRepository
from src.taskflow.repositories.reset_token import ResetTokenRepository
from src.taskflow.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "ProjectRepository",
    "ProjectRoleRepository",
    "ResetTokenRepository",
    "UserRepository",
]
