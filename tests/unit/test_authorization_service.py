"""Unit tests for project role authorization."""

from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from sqlalchemy.exc import OperationalError

from src.taskflow.core import messages
from src.taskflow.core.exceptions import ForbiddenError, InternalError
from src.taskflow.models import ANY_PROJECT_ROLE, PROJECT_MANAGERS, GlobalRole, ProjectRole
from src.taskflow.schemas.auth import Principal
from src.taskflow.services.authorization_service import (
    ProjectAuthorizationService,
    require_global_admin,
)
from tests.factories import ProjectFactory, UserFactory, UserProjectRoleFactory

pytestmark = pytest.mark.unit


def _principal(role: GlobalRole = GlobalRole.REGULAR_USER) -> Principal:
    return Principal(id=uuid4(), global_role=role, email="p@example.com")


@pytest.fixture
def project():
    return ProjectFactory.build()


@pytest.fixture
def mock_project_repo() -> MagicMock:
    repo = MagicMock()
    repo.get_with_roster = AsyncMock(return_value=None)
    return repo


@pytest.fixture
def authorizer(mock_project_repo) -> ProjectAuthorizationService:
    return ProjectAuthorizationService(mock_project_repo)


def _with_member(mock_project_repo, project, principal: Principal, role: ProjectRole) -> None:
    user = UserFactory.build(id=principal.id)
    membership = UserProjectRoleFactory.build(
        user_id=principal.id, project_id=project.id, role=role.value
    )
    mock_project_repo.get_with_roster.return_value = (project, [(membership, user)])


class TestAuthorize:
    async def test_global_admin_always_allowed(self, authorizer, mock_project_repo, project):
        await authorizer.authorize(_principal(GlobalRole.ADMIN), project.id, PROJECT_MANAGERS)

        mock_project_repo.get_with_roster.assert_not_awaited()

    async def test_global_admin_allowed_for_missing_project(self, authorizer):
        await authorizer.authorize(_principal(GlobalRole.ADMIN), uuid4(), PROJECT_MANAGERS)

    @pytest.mark.parametrize("required", [None, frozenset()])
    async def test_no_required_roles_allows_anyone(
        self, authorizer, mock_project_repo, project, required
    ):
        await authorizer.authorize(_principal(), project.id, required)

        mock_project_repo.get_with_roster.assert_not_awaited()

    @pytest.mark.parametrize("role", [ProjectRole.OWNER, ProjectRole.ADMIN])
    async def test_managers_may_manage(self, authorizer, mock_project_repo, project, role):
        principal = _principal()
        _with_member(mock_project_repo, project, principal, role)

        await authorizer.authorize(principal, project.id, PROJECT_MANAGERS)

    @pytest.mark.parametrize(
        "role", [ProjectRole.EDITOR, ProjectRole.VIEWER, ProjectRole.MEMBER]
    )
    async def test_other_roles_may_not_manage(self, authorizer, mock_project_repo, project, role):
        principal = _principal()
        _with_member(mock_project_repo, project, principal, role)

        with pytest.raises(ForbiddenError) as exc_info:
            await authorizer.authorize(principal, project.id, PROJECT_MANAGERS)

        assert exc_info.value.message == messages.PROJECT_FORBIDDEN

    @pytest.mark.parametrize("role", list(ProjectRole))
    async def test_any_member_may_read(self, authorizer, mock_project_repo, project, role):
        principal = _principal()
        _with_member(mock_project_repo, project, principal, role)

        await authorizer.authorize(principal, project.id, ANY_PROJECT_ROLE)

    async def test_non_member_forbidden(self, authorizer, mock_project_repo, project):
        _with_member(mock_project_repo, project, _principal(), ProjectRole.OWNER)

        with pytest.raises(ForbiddenError):
            await authorizer.authorize(_principal(), project.id, ANY_PROJECT_ROLE)

    async def test_missing_project_is_forbidden_not_found(self, authorizer):
        with pytest.raises(ForbiddenError) as exc_info:
            await authorizer.authorize(_principal(), uuid4(), ANY_PROJECT_ROLE)

        assert exc_info.value.status_code == 403
        assert exc_info.value.message == messages.PROJECT_FORBIDDEN

    async def test_unrecognized_global_role_has_no_privilege(
        self, authorizer, mock_project_repo, project
    ):
        with pytest.raises(ForbiddenError):
            await authorizer.authorize(
                _principal(GlobalRole.UNRECOGNIZED), project.id, ANY_PROJECT_ROLE
            )

    async def test_roster_failure(self, authorizer, mock_project_repo):
        mock_project_repo.get_with_roster.side_effect = OperationalError(
            "SELECT", {}, Exception("down")
        )

        with pytest.raises(InternalError):
            await authorizer.authorize(_principal(), uuid4(), ANY_PROJECT_ROLE)


class TestRequireGlobalAdmin:
    def test_admin(self):
        require_global_admin(_principal(GlobalRole.ADMIN))

    @pytest.mark.parametrize("role", [GlobalRole.REGULAR_USER, GlobalRole.UNRECOGNIZED])
    def test_non_admin(self, role):
        with pytest.raises(ForbiddenError) as exc_info:
            require_global_admin(_principal(role))

        assert exc_info.value.message == messages.INCORRECT_ROLE
