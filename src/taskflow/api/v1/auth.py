"""Account and session endpoints."""

from fastapi import APIRouter, Response, status
from starlette.requests import Request

from src.taskflow.api.dependencies import (
    AccountServiceDep,
    AuthServiceDep,
    CurrentPrincipal,
    SessionId,
    SessionStoreDep,
    clear_session_cookie,
    set_session_cookie,
)
from src.taskflow.core.rate_limit import limiter
from src.taskflow.schemas.auth import (
    ForgotPasswordRequest,
    LoginRequest,
    RegisterRequest,
    ResetPasswordRequest,
)
from src.taskflow.schemas.base import MessageResponse

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=MessageResponse,
    responses={
        200: {
            "description": "Account created, verification email sent",
            "content": {
                "application/json": {
                    "example": {
                        "statusCode": 200,
                        "message": "You will receive a registration email shortly!",
                    }
                }
            },
        },
        400: {"description": "Missing properties or password mismatch"},
        409: {"description": "Email already registered"},
        503: {"description": "Account created but the verification email could not be sent"},
    },
)
@limiter.limit("5/minute")
async def register(
    request: Request, data: RegisterRequest, service: AccountServiceDep
) -> MessageResponse:
    """Register a new, unverified account."""
    message = await service.register_user(data)
    return MessageResponse(status_code=status.HTTP_200_OK, message=message)


@router.get(
    "/verify-user/{user_id}/{token}",
    response_model=MessageResponse,
    responses={
        200: {"description": "Same confirmation whether or not the account exists"},
        400: {"description": "Malformed user id or invalid verification token"},
    },
)
async def verify_user(user_id: str, token: str, service: AccountServiceDep) -> MessageResponse:
    """Confirm an email address from the verification link."""
    message = await service.verify_user(user_id, token)
    return MessageResponse(status_code=status.HTTP_200_OK, message=message)


@router.post(
    "/login",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {
            "description": "Session established, SESSION_ID cookie set",
            "content": {
                "application/json": {
                    "example": {
                        "statusCode": 201,
                        "message": "Successfully logged in. Welcome James Smith!",
                    }
                }
            },
        },
        401: {"description": "Invalid credentials or email not verified"},
    },
)
@limiter.limit("5/minute")
async def login(
    request: Request, response: Response, data: LoginRequest, service: AuthServiceDep
) -> MessageResponse:
    """Validate credentials and open a session."""
    session_id, message = await service.login(data.email, data.password)
    set_session_cookie(response, session_id)
    return MessageResponse(status_code=status.HTTP_201_CREATED, message=message)


@router.post(
    "/logout",
    response_model=MessageResponse,
    responses={401: {"description": "Not authenticated"}},
)
async def logout(
    response: Response,
    _principal: CurrentPrincipal,
    session_id: SessionId,
    service: AuthServiceDep,
) -> MessageResponse:
    """End the current session."""
    message = await service.logout(session_id)
    clear_session_cookie(response)
    return MessageResponse(status_code=status.HTTP_200_OK, message=message)


@router.delete(
    "",
    response_model=MessageResponse,
    responses={401: {"description": "Not authenticated"}},
)
async def delete_account(
    response: Response,
    principal: CurrentPrincipal,
    session_id: SessionId,
    session_store: SessionStoreDep,
    service: AccountServiceDep,
) -> MessageResponse:
    """Delete the signed-in account and end its session."""
    await session_store.destroy(session_id)
    clear_session_cookie(response)
    message = await service.delete_user(principal.id)
    return MessageResponse(status_code=status.HTTP_200_OK, message=message)


@router.post(
    "/reset-password",
    response_model=MessageResponse,
    responses={
        401: {"description": "Not authenticated"},
        503: {"description": "Reset email could not be sent"},
    },
)
@limiter.limit("3/minute")
async def request_password_reset(
    request: Request, principal: CurrentPrincipal, service: AccountServiceDep
) -> MessageResponse:
    """Email a password reset link to the signed-in user."""
    message = await service.send_reset_password_email(principal.id)
    return MessageResponse(status_code=status.HTTP_200_OK, message=message)


@router.post(
    "/forgot-password",
    response_model=MessageResponse,
    responses={
        200: {"description": "Identical response for registered and unregistered emails"},
    },
)
@limiter.limit("3/minute")
async def forgot_password(
    request: Request, data: ForgotPasswordRequest, service: AccountServiceDep
) -> MessageResponse:
    """Email a password reset link if the address is registered."""
    message = await service.send_forgot_password_email(data)
    return MessageResponse(status_code=status.HTTP_200_OK, message=message)


@router.post(
    "/reset-password/{user_id}/{token}",
    response_model=MessageResponse,
    responses={
        200: {"description": "Same confirmation whether or not the account exists"},
        400: {"description": "Invalid link, missing properties or password mismatch"},
    },
)
@limiter.limit("5/minute")
async def reset_password(
    request: Request,
    user_id: str,
    token: str,
    data: ResetPasswordRequest,
    service: AccountServiceDep,
) -> MessageResponse:
    """Set a new password using the emailed reset link."""
    message = await service.reset_password(user_id, token, data)
    return MessageResponse(status_code=status.HTTP_200_OK, message=message)
