"""Tests for request and response schemas."""

import pytest
from pydantic import ValidationError

from src.taskflow.models import GlobalRole, ProjectRole
from src.taskflow.schemas.auth import RegisterRequest, ResetPasswordRequest
from src.taskflow.schemas.base import MessageResponse
from src.taskflow.schemas.project import MemberAssign, ProjectCreate, ProjectUpdate
from src.taskflow.schemas.user import UserDetailRead, UserRead
from tests.factories import UserFactory

pytestmark = pytest.mark.unit


class TestWireFormat:
    def test_message_response_uses_camel_case(self):
        body = MessageResponse(status_code=200, message="ok").model_dump(by_alias=True)

        assert body == {"statusCode": 200, "message": "ok"}

    def test_register_accepts_camel_case_confirmation(self):
        data = RegisterRequest.model_validate({"passwordConfirmation": "x"})

        assert data.password_confirmation == "x"

    def test_user_read_has_no_credentials(self):
        body = UserRead.model_validate(UserFactory.build()).model_dump(by_alias=True)

        assert set(body) == {"id", "firstname", "lastname", "email", "createdAt"}


class TestMissingFields:
    def test_declaration_order(self):
        data = RegisterRequest.model_validate({"lastname": "Smith", "password": "x"})

        assert data.missing_fields() == ["firstname", "email", "passwordConfirmation"]

    def test_reset_body(self):
        assert ResetPasswordRequest().missing_fields() == ["password", "passwordConfirmation"]


class TestRoles:
    def test_unknown_global_role(self):
        assert GlobalRole("SOMETHING_NEW") is GlobalRole.UNRECOGNIZED

    def test_detail_read_coerces_role(self):
        user = UserFactory.build(global_role="ADMIN")

        assert UserDetailRead.model_validate(user).global_role is GlobalRole.ADMIN

    def test_project_role_hierarchy(self):
        ranks = [role.rank for role in ProjectRole]

        assert ranks == sorted(ranks)
        assert ProjectRole.OWNER.rank < ProjectRole.MEMBER.rank

    def test_member_assign_rejects_unknown_role(self):
        with pytest.raises(ValidationError):
            MemberAssign.model_validate(
                {"userId": "6f1c1f5e-4a55-4a8e-9d7c-3b1a7b7a6c11", "role": "GOD"}
            )


class TestProjectSchemas:
    def test_name_length_limit(self):
        with pytest.raises(ValidationError):
            ProjectCreate(name="x" * 26, description="ok")

    def test_blank_fields_are_missing(self):
        assert ProjectCreate(name=" ", description="").missing_fields() == ["name", "description"]

    def test_update_rejects_blank_name(self):
        with pytest.raises(ValidationError):
            ProjectUpdate(name="   ")
