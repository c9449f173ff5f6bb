"""Project management - CRUD and member role assignment."""

from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.taskflow.core import messages
from src.taskflow.core.exceptions import InternalError, NotFoundError, ValidationError
from src.taskflow.core.logging import get_logger
from src.taskflow.models import Project, ProjectRole, User, UserProjectRole
from src.taskflow.repositories import ProjectRepository, ProjectRoleRepository, UserRepository
from src.taskflow.schemas.auth import Principal
from src.taskflow.schemas.project import (
    MemberAssign,
    ProjectCreate,
    ProjectDetailRead,
    ProjectMemberRead,
    ProjectUpdate,
)
from src.taskflow.schemas.user import UserRead

logger = get_logger(__name__)


def _role_rank(role: str) -> int:
    try:
        return ProjectRole(role).rank
    except ValueError:
        return len(ProjectRole)


def build_project_detail(
    project: Project, roster: list[tuple[UserProjectRole, User]]
) -> ProjectDetailRead:
    """Split the roster into the owner and the other members ordered by role."""
    owner: UserRead | None = None
    members: list[tuple[UserProjectRole, User]] = []
    for membership, user in roster:
        if membership.role == ProjectRole.OWNER.value and owner is None:
            owner = UserRead.model_validate(user)
        else:
            members.append((membership, user))
    members.sort(key=lambda item: (_role_rank(item[0].role), item[1].lastname, item[1].firstname))
    return ProjectDetailRead(
        id=project.id,
        name=project.name,
        description=project.description,
        created_at=project.created_at,
        owner=owner,
        members=[
            ProjectMemberRead(user=UserRead.model_validate(user), role=membership.role)
            for membership, user in members
        ],
    )


class ProjectService:
    """Project operations. Authorization is checked before these are called."""

    def __init__(
        self,
        project_repo: ProjectRepository,
        role_repo: ProjectRoleRepository,
        user_repo: UserRepository,
        session: AsyncSession,
    ):
        self.project_repo = project_repo
        self.role_repo = role_repo
        self.user_repo = user_repo
        self.session = session

    async def _commit(self, context: str, **log_fields: object) -> None:
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(
                "Failed to persist project change", context=context, exc_info=e, **log_fields
            )
            raise InternalError() from e

    async def _load(self, project_id: UUID, context: str) -> Project:
        try:
            project = await self.project_repo.get_by_id(project_id)
        except SQLAlchemyError as e:
            logger.error("Project lookup failed", context=context, exc_info=e)
            raise InternalError() from e
        if project is None:
            raise NotFoundError(messages.PROJECT_NOT_FOUND)
        return project

    async def create(self, principal: Principal, data: ProjectCreate) -> Project:
        """Create a project owned by ``principal``.

        The project row and its OWNER membership are written in one transaction.

        Raises:
            ValidationError: name or description missing
        """
        context = "ProjectService.create"
        missing = data.missing_fields()
        if missing:
            logger.warning("Project rejected", context=context, missing=missing)
            raise ValidationError(
                messages.MISSING_PROPERTIES.format(fields=", ".join(missing)),
                code="MISSING_PROPERTIES",
            )

        project = Project(name=data.name or "", description=data.description or "")
        self.project_repo.add(project)
        self.role_repo.add(
            UserProjectRole(
                user_id=principal.id,
                project_id=project.id,
                role=ProjectRole.OWNER.value,
            )
        )
        await self._commit(context, user_id=str(principal.id))

        logger.info("Project created", context=context, project_id=str(project.id))
        return project

    async def list_for_user(self, principal: Principal) -> list[Project]:
        try:
            return await self.project_repo.list_for_user(principal.id)
        except SQLAlchemyError as e:
            logger.error(
                "Project listing failed", context="ProjectService.list_for_user", exc_info=e
            )
            raise InternalError() from e

    async def list_all(self) -> list[Project]:
        try:
            return await self.project_repo.list_all()
        except SQLAlchemyError as e:
            logger.error("Project listing failed", context="ProjectService.list_all", exc_info=e)
            raise InternalError() from e

    async def get(self, project_id: UUID) -> ProjectDetailRead:
        """Project with owner and members.

        Raises:
            NotFoundError: no such project
        """
        try:
            loaded = await self.project_repo.get_with_roster(project_id)
        except SQLAlchemyError as e:
            logger.error("Project lookup failed", context="ProjectService.get", exc_info=e)
            raise InternalError() from e
        if loaded is None:
            raise NotFoundError(messages.PROJECT_NOT_FOUND)
        return build_project_detail(*loaded)

    async def update(self, project_id: UUID, data: ProjectUpdate) -> Project:
        """Apply the fields present in ``data``."""
        context = "ProjectService.update"
        project = await self._load(project_id, context)

        for field, value in data.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(project, field, value)
        await self._commit(context, project_id=str(project_id))

        logger.info("Project updated", context=context, project_id=str(project_id))
        return project

    async def delete(self, project_id: UUID) -> None:
        """Delete a project and all its memberships."""
        context = "ProjectService.delete"
        try:
            deleted = await self.project_repo.delete_with_roles(project_id)
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("Failed to delete project", context=context, exc_info=e)
            raise InternalError() from e
        if not deleted:
            await self.session.rollback()
            raise NotFoundError(messages.PROJECT_NOT_FOUND)
        await self._commit(context, project_id=str(project_id))
        logger.info("Project deleted", context=context, project_id=str(project_id))

    async def assign_member(self, project_id: UUID, data: MemberAssign) -> UserProjectRole:
        """Give ``data.user_id`` the role ``data.role`` in the project.

        A user holds at most one role per project, so an existing membership
        is updated in place. Ownership cannot be granted or taken away here.

        Raises:
            ValidationError: OWNER requested, or the target is the owner
            NotFoundError: project or user does not exist
        """
        context = "ProjectService.assign_member"
        if data.role == ProjectRole.OWNER:
            raise ValidationError(messages.OWNER_ROLE_NOT_ASSIGNABLE, code="OWNER_ROLE")

        await self._load(project_id, context)
        try:
            user = await self.user_repo.get_by_id(data.user_id)
            membership = await self.role_repo.find_role(project_id, data.user_id)
        except SQLAlchemyError as e:
            logger.error("Membership lookup failed", context=context, exc_info=e)
            raise InternalError() from e
        if user is None:
            raise NotFoundError(messages.USER_NOT_FOUND)

        if membership is None:
            membership = UserProjectRole(
                user_id=data.user_id, project_id=project_id, role=data.role.value
            )
            self.role_repo.add(membership)
        elif membership.role == ProjectRole.OWNER.value:
            raise ValidationError(messages.OWNER_ROLE_NOT_ASSIGNABLE, code="OWNER_ROLE")
        else:
            membership.role = data.role.value
        await self._commit(context, project_id=str(project_id), user_id=str(data.user_id))

        logger.info(
            "Member role assigned",
            context=context,
            project_id=str(project_id),
            user_id=str(data.user_id),
            role=data.role.value,
        )
        return membership
