"""Session guard and project role authorization dependencies.

Protected routes compose these explicitly: the session guard resolves the
principal, then (for project-scoped routes) the role check runs against it.
"""

from collections.abc import Awaitable, Callable
from typing import Annotated
from uuid import UUID

from fastapi import Depends, Request, Response

from src.taskflow.api.dependencies.services import (
    AccountServiceDep,
    AuthorizationServiceDep,
    SessionStoreDep,
)
from src.taskflow.core import messages
from src.taskflow.core.config import get_settings
from src.taskflow.core.exceptions import UnauthorizedError, ValidationError
from src.taskflow.core.logging import bind_user_context
from src.taskflow.models import ANY_PROJECT_ROLE, PROJECT_MANAGERS, ProjectRole
from src.taskflow.schemas.auth import Principal
from src.taskflow.services import require_global_admin


def set_session_cookie(response: Response, session_id: str) -> None:
    """Issue (or re-issue, extending its lifetime) the session cookie."""
    settings = get_settings()
    response.set_cookie(
        key=settings.session_cookie_name,
        value=session_id,
        max_age=settings.session_ttl_seconds,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )


def clear_session_cookie(response: Response) -> None:
    settings = get_settings()
    response.delete_cookie(
        key=settings.session_cookie_name,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )


async def get_session_id(request: Request) -> str:
    """Session id from the request cookie.

    Raises:
        UnauthorizedError: no session cookie
    """
    session_id = request.cookies.get(get_settings().session_cookie_name)
    if not session_id:
        raise UnauthorizedError()
    return session_id


SessionId = Annotated[str, Depends(get_session_id)]


async def get_current_principal(
    session_id: SessionId,
    response: Response,
    session_store: SessionStoreDep,
    account_service: AccountServiceDep,
) -> Principal:
    """Session guard: resolve the session to an existing account.

    Each successful resolution slides the session expiry forward.

    Raises:
        UnauthorizedError: unknown or expired session, or the account is gone
    """
    user_id = await session_store.get(session_id)
    if user_id is None:
        raise UnauthorizedError()

    account = await account_service.find_by_id(user_id)
    if account is None:
        await session_store.destroy(session_id)
        raise UnauthorizedError()

    set_session_cookie(response, session_id)
    bind_user_context(account.id, account.email)
    return Principal(id=account.id, global_role=account.global_role, email=account.email)


CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]


async def get_global_admin(principal: CurrentPrincipal) -> Principal:
    """Require the current principal to be a global administrator."""
    require_global_admin(principal)
    return principal


GlobalAdmin = Annotated[Principal, Depends(get_global_admin)]


def parse_project_id(value: str) -> UUID:
    try:
        return UUID(value)
    except ValueError as e:
        raise ValidationError(messages.INVALID_PROJECT_ID, code="INVALID_PROJECT_ID") from e


def require_project_roles(
    required_roles: frozenset[ProjectRole],
) -> Callable[..., Awaitable[UUID]]:
    """Build a dependency that authorizes the ``project_id`` path parameter.

    The dependency returns the parsed project id once access is granted.
    """

    async def authorize_project(
        project_id: str,
        principal: CurrentPrincipal,
        authorizer: AuthorizationServiceDep,
    ) -> UUID:
        pid = parse_project_id(project_id)
        await authorizer.authorize(principal, pid, required_roles)
        return pid

    return authorize_project


# Project id for reads: any membership (or global admin)
ReadableProject = Annotated[UUID, Depends(require_project_roles(ANY_PROJECT_ROLE))]
# Project id for update, delete and membership changes: OWNER or ADMIN (or global admin)
ManagedProject = Annotated[UUID, Depends(require_project_roles(PROJECT_MANAGERS))]
