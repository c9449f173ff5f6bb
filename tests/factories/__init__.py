"""Test data factories using polyfactory."""

from tests.factories.auth import ResetTokenFactory, generate_token_hash
from tests.factories.base import BaseFactory, generate_uuid, utc_now
from tests.factories.project import ProjectFactory, UserProjectRoleFactory
from tests.factories.user import DEFAULT_TEST_PASSWORD, UserFactory

__all__ = [
    "DEFAULT_TEST_PASSWORD",
    "BaseFactory",
    "ProjectFactory",
    "ResetTokenFactory",
    "UserFactory",
    "UserProjectRoleFactory",
    "generate_token_hash",
    "generate_uuid",
    "utc_now",
]
