"""Project endpoints - CRUD and membership, guarded by project role."""

from fastapi import APIRouter, status

from src.taskflow.api.dependencies import (
    CurrentPrincipal,
    GlobalAdmin,
    ManagedProject,
    ProjectServiceDep,
    ReadableProject,
)
from src.taskflow.core import messages
from src.taskflow.schemas.base import DataResponse, MessageResponse
from src.taskflow.schemas.project import (
    MemberAssign,
    ProjectCreate,
    ProjectDetailRead,
    ProjectMemberRead,
    ProjectRead,
    ProjectUpdate,
)

router = APIRouter(prefix="/projects", tags=["projects"])

_FORBIDDEN = {403: {"description": "Project not found or you lack permissions"}}


@router.post(
    "",
    response_model=DataResponse[ProjectRead],
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {"description": "Project created; the caller becomes its owner"},
        400: {"description": "Missing or too long name/description"},
    },
)
async def create_project(
    data: ProjectCreate, principal: CurrentPrincipal, service: ProjectServiceDep
) -> DataResponse[ProjectRead]:
    """Create a project owned by the caller."""
    project = await service.create(principal, data)
    return DataResponse(
        status_code=status.HTTP_201_CREATED,
        message=messages.PROJECT_CREATED,
        data=ProjectRead.model_validate(project),
    )


@router.get("", response_model=DataResponse[list[ProjectRead]])
async def list_my_projects(
    principal: CurrentPrincipal, service: ProjectServiceDep
) -> DataResponse[list[ProjectRead]]:
    """Projects in which the caller holds any role."""
    projects = await service.list_for_user(principal)
    return DataResponse(
        status_code=status.HTTP_200_OK,
        message=messages.PROJECTS_FOUND.format(count=len(projects)),
        data=[ProjectRead.model_validate(p) for p in projects],
    )


@router.get(
    "/all",
    response_model=DataResponse[list[ProjectRead]],
    responses={403: {"description": "Global administrator role required"}},
)
async def list_all_projects(
    _admin: GlobalAdmin, service: ProjectServiceDep
) -> DataResponse[list[ProjectRead]]:
    """Every project (global administrators only)."""
    projects = await service.list_all()
    return DataResponse(
        status_code=status.HTTP_200_OK,
        message=messages.PROJECTS_FOUND.format(count=len(projects)),
        data=[ProjectRead.model_validate(p) for p in projects],
    )


@router.get(
    "/{project_id}",
    response_model=DataResponse[ProjectDetailRead],
    responses={**_FORBIDDEN, 404: {"description": "Project not found (global administrators)"}},
)
async def get_project(
    project_id: ReadableProject, service: ProjectServiceDep
) -> DataResponse[ProjectDetailRead]:
    """Project with its owner and members ordered by role."""
    project = await service.get(project_id)
    return DataResponse(
        status_code=status.HTTP_200_OK, message=messages.PROJECT_FOUND, data=project
    )


@router.patch(
    "/{project_id}",
    response_model=DataResponse[ProjectRead],
    responses={**_FORBIDDEN, 400: {"description": "Invalid name or description"}},
)
async def update_project(
    project_id: ManagedProject, data: ProjectUpdate, service: ProjectServiceDep
) -> DataResponse[ProjectRead]:
    """Update name and/or description (OWNER or ADMIN)."""
    project = await service.update(project_id, data)
    return DataResponse(
        status_code=status.HTTP_200_OK,
        message=messages.PROJECT_UPDATED,
        data=ProjectRead.model_validate(project),
    )


@router.delete("/{project_id}", response_model=MessageResponse, responses=_FORBIDDEN)
async def delete_project(
    project_id: ManagedProject, service: ProjectServiceDep
) -> MessageResponse:
    """Delete a project and its memberships (OWNER or ADMIN)."""
    await service.delete(project_id)
    return MessageResponse(status_code=status.HTTP_200_OK, message=messages.PROJECT_DELETED)


@router.put(
    "/{project_id}/members",
    response_model=DataResponse[ProjectMemberRead],
    responses={
        **_FORBIDDEN,
        400: {"description": "The owner role cannot be assigned or changed"},
        404: {"description": "User not found"},
    },
)
async def assign_member(
    project_id: ManagedProject,
    data: MemberAssign,
    service: ProjectServiceDep,
) -> DataResponse[ProjectMemberRead]:
    """Give a user a role in the project, replacing any role they held (OWNER or ADMIN)."""
    await service.assign_member(project_id, data)
    project = await service.get(project_id)
    member = next(m for m in project.members if m.user.id == data.user_id)
    return DataResponse(
        status_code=status.HTTP_200_OK, message=messages.MEMBER_ASSIGNED, data=member
    )
