"""Shared enums for models."""

from enum import Enum


class GlobalRole(str, Enum):
    """Account-wide privilege tier."""

    REGULAR_USER = "REGULAR_USER"
    ADMIN = "ADMIN"
    UNRECOGNIZED = "UNRECOGNIZED"

    @classmethod
    def _missing_(cls, value: object) -> "GlobalRole":
        # Values written by newer releases load as a non-privileged sentinel
        return cls.UNRECOGNIZED


class ProjectRole(str, Enum):
    """Membership-scoped privilege tier, declared from highest to lowest."""

    OWNER = "OWNER"
    ADMIN = "ADMIN"
    EDITOR = "EDITOR"
    VIEWER = "VIEWER"
    MEMBER = "MEMBER"

    @property
    def rank(self) -> int:
        """Position in the hierarchy; lower is more privileged."""
        return list(ProjectRole).index(self)


# Update/delete of a project and membership management
PROJECT_MANAGERS = frozenset({ProjectRole.OWNER, ProjectRole.ADMIN})
# Any recognised membership grants read access
ANY_PROJECT_ROLE = frozenset(ProjectRole)
