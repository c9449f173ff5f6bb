"""FastAPI dependency injection definitions.

Re-exports all dependencies for convenience.
"""

from src.taskflow.api.dependencies.auth import (
    CurrentPrincipal,
    GlobalAdmin,
    ManagedProject,
    ReadableProject,
    SessionId,
    clear_session_cookie,
    get_current_principal,
    get_global_admin,
    require_project_roles,
    set_session_cookie,
)
from src.taskflow.api.dependencies.db import DBSession, get_db_session
from src.taskflow.api.dependencies.repositories import (
    ProjectRepo,
    ProjectRoleRepo,
    ResetTokenRepo,
    UserRepo,
)
from src.taskflow.api.dependencies.services import (
    AccountServiceDep,
    AuthorizationServiceDep,
    AuthServiceDep,
    ProjectServiceDep,
    ResetTokenServiceDep,
    SessionStoreDep,
)

__all__ = [
    # Database
    "DBSession",
    "get_db_session",
    # Auth
    "CurrentPrincipal",
    "GlobalAdmin",
    "ManagedProject",
    "ReadableProject",
    "SessionId",
    "clear_session_cookie",
    "get_current_principal",
    "get_global_admin",
    "require_project_roles",
    "set_session_cookie",
    # Repositories
    "ProjectRepo",
    "ProjectRoleRepo",
    "ResetTokenRepo",
    "UserRepo",
    # Services
    "AccountServiceDep",
    "AuthServiceDep",
    "AuthorizationServiceDep",
    "ProjectServiceDep",
    "ResetTokenServiceDep",
    "SessionStoreDep",
]
