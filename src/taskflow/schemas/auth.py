"""Request bodies for account and credential endpoints.

Fields are optional at the schema level so that missing properties are
reported together, in declaration order, by the service layer rather than
one at a time by request validation.
"""

from dataclasses import dataclass
from uuid import UUID

from src.taskflow.models.enums import GlobalRole
from src.taskflow.schemas.base import ApiModel


class _RequiredFieldsMixin:
    """Reports absent or empty fields by their wire name, in declaration order."""

    def missing_fields(self) -> list[str]:
        fields = type(self).model_fields  # type: ignore[attr-defined]
        return [fields[name].alias or name for name in fields if not getattr(self, name)]


class RegisterRequest(_RequiredFieldsMixin, ApiModel):
    firstname: str | None = None
    lastname: str | None = None
    email: str | None = None
    password: str | None = None
    password_confirmation: str | None = None


class ResetPasswordRequest(_RequiredFieldsMixin, ApiModel):
    """New password submitted from a reset link."""

    password: str | None = None
    password_confirmation: str | None = None


class LoginRequest(ApiModel):
    email: str = ""
    password: str = ""


class ForgotPasswordRequest(ApiModel):
    email: str | None = None


@dataclass(frozen=True)
class Principal:
    """Authenticated caller, resolved from the session on every request."""

    id: UUID
    global_role: GlobalRole
    email: str

    @property
    def is_admin(self) -> bool:
        return self.global_role == GlobalRole.ADMIN
