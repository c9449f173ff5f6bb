"""User endpoints."""

from uuid import UUID

from fastapi import APIRouter, status

from src.taskflow.api.dependencies import AccountServiceDep, CurrentPrincipal, GlobalAdmin
from src.taskflow.core import messages
from src.taskflow.core.exceptions import NotFoundError
from src.taskflow.schemas.base import DataResponse, MessageResponse
from src.taskflow.schemas.user import UserDetailRead, UserRead
from src.taskflow.services.account_service import parse_user_id

router = APIRouter(prefix="/users", tags=["users"])


@router.get(
    "/me",
    response_model=DataResponse[UserDetailRead],
    responses={401: {"description": "Not authenticated"}},
)
async def get_me(
    principal: CurrentPrincipal, service: AccountServiceDep
) -> DataResponse[UserDetailRead]:
    """Current account, including verification state and global role."""
    account = await service.find_by_id(principal.id)
    if account is None:
        raise NotFoundError(messages.USER_NOT_FOUND)
    return DataResponse(status_code=status.HTTP_200_OK, message=messages.USER_FOUND, data=account)


@router.get(
    "",
    # Shape depends on the caller, so the body is encoded as returned
    response_model=None,
    responses={
        200: {"description": "Public profiles, or full account views for global administrators"},
        401: {"description": "Not authenticated"},
    },
)
async def list_users(
    principal: CurrentPrincipal, service: AccountServiceDep
) -> DataResponse[list[UserDetailRead]] | DataResponse[list[UserRead]]:
    """List users. Global administrators also see verification state and role."""
    accounts = await service.list_users()
    message = messages.USERS_FOUND.format(count=len(accounts))
    if principal.is_admin:
        return DataResponse[list[UserDetailRead]](
            status_code=status.HTTP_200_OK, message=message, data=accounts
        )
    return DataResponse[list[UserRead]](
        status_code=status.HTTP_200_OK,
        message=message,
        data=[UserRead.model_validate(account) for account in accounts],
    )


@router.get(
    "/{user_id}",
    response_model=DataResponse[UserRead],
    responses={
        400: {"description": "Malformed user id"},
        401: {"description": "Not authenticated"},
        404: {"description": "User not found"},
    },
)
async def get_user(
    user_id: str, _principal: CurrentPrincipal, service: AccountServiceDep
) -> DataResponse[UserRead]:
    """Public profile of a user."""
    account = await service.find_by_id(parse_user_id(user_id))
    if account is None:
        raise NotFoundError(messages.USER_NOT_FOUND)
    return DataResponse(
        status_code=status.HTTP_200_OK,
        message=messages.USER_FOUND,
        data=UserRead.model_validate(account),
    )


@router.delete(
    "/{user_id}",
    response_model=MessageResponse,
    responses={
        400: {"description": "Malformed user id"},
        403: {"description": "Global administrator role required"},
        404: {"description": "User not found"},
    },
)
async def delete_user(
    user_id: str, _admin: GlobalAdmin, service: AccountServiceDep
) -> MessageResponse:
    """Delete any account (global administrators only)."""
    message = await service.delete_user(user_id)
    return MessageResponse(status_code=status.HTTP_200_OK, message=message)
