"""Project role authorization.

Evaluated on every project-scoped request against a fresh roster snapshot;
nothing is cached between requests.
"""

from collections.abc import Collection
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from src.taskflow.core import messages
from src.taskflow.core.exceptions import ForbiddenError, InternalError
from src.taskflow.core.logging import get_logger
from src.taskflow.models import ProjectRole
from src.taskflow.repositories import ProjectRepository
from src.taskflow.schemas.auth import Principal

logger = get_logger(__name__)


class ProjectAuthorizationService:
    """Decides whether a principal may act on a project."""

    def __init__(self, project_repo: ProjectRepository):
        self.project_repo = project_repo

    async def authorize(
        self,
        principal: Principal,
        project_id: UUID,
        required_roles: Collection[ProjectRole] | None = None,
    ) -> None:
        """Allow or raise. Never mutates state.

        1. Global administrators are always allowed.
        2. Operations without required roles are always allowed.
        3. A missing project is reported as forbidden, never as not found.
        4. Otherwise the principal needs a membership whose role is required.

        Raises:
            ForbiddenError: the principal may not act on the project
        """
        if principal.is_admin:
            return
        if not required_roles:
            return

        try:
            loaded = await self.project_repo.get_with_roster(project_id)
        except SQLAlchemyError as e:
            logger.error(
                "Roster lookup failed",
                context="ProjectAuthorizationService.authorize",
                project_id=str(project_id),
                exc_info=e,
            )
            raise InternalError() from e

        if loaded is not None:
            _, roster = loaded
            allowed = {ProjectRole(role).value for role in required_roles}
            for membership, _user in roster:
                if membership.user_id == principal.id and membership.role in allowed:
                    return

        logger.warning(
            "Project access denied",
            context="ProjectAuthorizationService.authorize",
            project_id=str(project_id),
            user_id=str(principal.id),
        )
        raise ForbiddenError(messages.PROJECT_FORBIDDEN, code="FORBIDDEN")


def require_global_admin(principal: Principal) -> None:
    """Raise unless the principal is a global administrator."""
    if not principal.is_admin:
        raise ForbiddenError(messages.INCORRECT_ROLE, code="INCORRECT_ROLE")
