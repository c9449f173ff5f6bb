"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.taskflow.api.dependencies.db import DBSession
from src.taskflow.repositories import (
    ProjectRepository,
    ProjectRoleRepository,
    ResetTokenRepository,
    UserRepository,
)


def get_user_repository(session: DBSession) -> UserRepository:
    return UserRepository(session)


def get_reset_token_repository(session: DBSession) -> ResetTokenRepository:
    return ResetTokenRepository(session)


def get_project_repository(session: DBSession) -> ProjectRepository:
    return ProjectRepository(session)


def get_project_role_repository(session: DBSession) -> ProjectRoleRepository:
    return ProjectRoleRepository(session)


UserRepo = Annotated[UserRepository, Depends(get_user_repository)]
ResetTokenRepo = Annotated[ResetTokenRepository, Depends(get_reset_token_repository)]
ProjectRepo = Annotated[ProjectRepository, Depends(get_project_repository)]
ProjectRoleRepo = Annotated[ProjectRoleRepository, Depends(get_project_role_repository)]
