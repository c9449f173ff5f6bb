from src.taskflow.services.account_service import AccountService
from src.taskflow.services.auth_service import AuthService
from src.taskflow.services.authorization_service import (
    ProjectAuthorizationService,
    require_global_admin,
)
from src.taskflow.services.project_service import ProjectService
from src.taskflow.services.reset_token_service import ResetTokenService

__all__ = [
    "AccountService",
    "AuthService",
    "ProjectAuthorizationService",
    "ProjectService",
    "ResetTokenService",
    "require_global_admin",
]
