"""Model exports.

Import from here: `from src.taskflow.models import User, Project`
"""

from src.taskflow.models.auth import ResetToken
from src.taskflow.models.enums import ANY_PROJECT_ROLE, PROJECT_MANAGERS, GlobalRole, ProjectRole
from src.taskflow.models.project import Project, UserProjectRole
from src.taskflow.models.user import User

__all__ = [
    # Enums
    "ANY_PROJECT_ROLE",
    "GlobalRole",
    "PROJECT_MANAGERS",
    "ProjectRole",
    # Tables
    "Project",
    "ResetToken",
    "User",
    "UserProjectRole",
]
