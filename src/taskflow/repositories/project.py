"""Repositories for Project and UserProjectRole (the Project/Role Store)."""

from uuid import UUID

from sqlalchemy import delete
from sqlmodel import select

from src.taskflow.models import Project, User, UserProjectRole
from src.taskflow.repositories.base import BaseRepository


class ProjectRepository(BaseRepository[Project]):
    """Repository for Project entity."""

    model = Project

    async def list_all(self) -> list[Project]:
        """List every project, newest first."""
        result = await self.session.execute(
            select(Project).order_by(Project.created_at.desc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())

    async def list_for_user(self, user_id: UUID) -> list[Project]:
        """List projects in which the user holds any role, newest first."""
        result = await self.session.execute(
            select(Project)
            .join(UserProjectRole, UserProjectRole.project_id == Project.id)  # type: ignore[arg-type]
            .where(UserProjectRole.user_id == user_id)
            .order_by(Project.created_at.desc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())

    async def get_with_roster(
        self, project_id: UUID
    ) -> tuple[Project, list[tuple[UserProjectRole, User]]] | None:
        """Load a project and its membership roster in one snapshot.

        Returns None if the project does not exist.
        """
        project = await self.get_by_id(project_id)
        if project is None:
            return None
        result = await self.session.execute(
            select(UserProjectRole, User)
            .join(User, User.id == UserProjectRole.user_id)  # type: ignore[arg-type]
            .where(UserProjectRole.project_id == project_id)
        )
        roster = [(role, user) for role, user in result.all()]
        return project, roster

    async def delete_with_roles(self, project_id: UUID) -> int:
        """Delete a project and its memberships. Returns project rows deleted."""
        await self.session.execute(
            delete(UserProjectRole).where(UserProjectRole.project_id == project_id)  # type: ignore[arg-type]
        )
        result = await self.session.execute(
            delete(Project).where(Project.id == project_id)  # type: ignore[arg-type]
        )
        return result.rowcount or 0  # type: ignore[attr-defined]


class ProjectRoleRepository(BaseRepository[UserProjectRole]):
    """Repository for UserProjectRole entity."""

    model = UserProjectRole

    async def find_role(self, project_id: UUID, user_id: UUID) -> UserProjectRole | None:
        """Get the membership row of ``user_id`` in ``project_id``, if any."""
        result = await self.session.execute(
            select(UserProjectRole).where(
                UserProjectRole.project_id == project_id,
                UserProjectRole.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()
