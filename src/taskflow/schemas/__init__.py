from src.taskflow.schemas.auth import (
    ForgotPasswordRequest,
    LoginRequest,
    Principal,
    RegisterRequest,
    ResetPasswordRequest,
)
from src.taskflow.schemas.base import ApiModel, DataResponse, MessageResponse
from src.taskflow.schemas.project import (
    MemberAssign,
    ProjectCreate,
    ProjectDetailRead,
    ProjectMemberRead,
    ProjectRead,
    ProjectUpdate,
)
from src.taskflow.schemas.user import UserDetailRead, UserRead

__all__ = [
    # Envelopes
    "ApiModel",
    "DataResponse",
    "MessageResponse",
    # Auth
    "ForgotPasswordRequest",
    "LoginRequest",
    "Principal",
    "RegisterRequest",
    "ResetPasswordRequest",
    # Project
    "MemberAssign",
    "ProjectCreate",
    "ProjectDetailRead",
    "ProjectMemberRead",
    "ProjectRead",
    "ProjectUpdate",
    # User
    "UserDetailRead",
    "UserRead",
]
