"""Service factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.taskflow.api.dependencies.db import DBSession
from src.taskflow.api.dependencies.repositories import (
    ProjectRepo,
    ProjectRoleRepo,
    ResetTokenRepo,
    UserRepo,
)
from src.taskflow.core.sessions import SessionStore, get_session_store
from src.taskflow.services import (
    AccountService,
    AuthService,
    ProjectAuthorizationService,
    ProjectService,
    ResetTokenService,
)

SessionStoreDep = Annotated[SessionStore, Depends(get_session_store)]


def get_reset_token_service(
    reset_token_repo: ResetTokenRepo,
    user_repo: UserRepo,
    session: DBSession,
) -> ResetTokenService:
    """Get reset token service."""
    return ResetTokenService(reset_token_repo, user_repo, session)


ResetTokenServiceDep = Annotated[ResetTokenService, Depends(get_reset_token_service)]


def get_account_service(
    user_repo: UserRepo,
    reset_token_service: ResetTokenServiceDep,
    session: DBSession,
) -> AccountService:
    """Get account lifecycle service."""
    return AccountService(user_repo, reset_token_service, session)


AccountServiceDep = Annotated[AccountService, Depends(get_account_service)]


def get_auth_service(
    user_repo: UserRepo,
    account_service: AccountServiceDep,
    session_store: SessionStoreDep,
) -> AuthService:
    """Get auth service with the injected session store."""
    return AuthService(user_repo, account_service, session_store)


def get_authorization_service(project_repo: ProjectRepo) -> ProjectAuthorizationService:
    """Get project role authorization service."""
    return ProjectAuthorizationService(project_repo)


def get_project_service(
    project_repo: ProjectRepo,
    role_repo: ProjectRoleRepo,
    user_repo: UserRepo,
    session: DBSession,
) -> ProjectService:
    """Get project service."""
    return ProjectService(project_repo, role_repo, user_repo, session)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
AuthorizationServiceDep = Annotated[
    ProjectAuthorizationService, Depends(get_authorization_service)
]
ProjectServiceDep = Annotated[ProjectService, Depends(get_project_service)]
