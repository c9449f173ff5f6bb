"""Initial migration

Revision ID: 001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa
import sqlmodel

from alembic import op

revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    # 1. Users
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("firstname", sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column("lastname", sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column("email", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column("hashed_password", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column(
            "email_verified", sa.Boolean(), nullable=False, server_default=sa.text("false")
        ),
        sa.Column(
            "global_role",
            sqlmodel.sql.sqltypes.AutoString(length=50),
            nullable=False,
            server_default="REGULAR_USER",
        ),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    # 2. Reset tokens (hashed, several per user allowed)
    op.create_table(
        "reset_tokens",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("token_hash", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("expires_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_reset_tokens_user_id", "reset_tokens", ["user_id"], unique=False)
    op.create_index("ix_reset_tokens_token_hash", "reset_tokens", ["token_hash"], unique=True)
    op.create_index("ix_reset_tokens_expires_at", "reset_tokens", ["expires_at"], unique=False)

    # 3. Projects
    op.create_table(
        "projects",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sqlmodel.sql.sqltypes.AutoString(length=25), nullable=False),
        sa.Column("description", sqlmodel.sql.sqltypes.AutoString(length=500), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_projects_created_at", "projects", ["created_at"], unique=False)

    # 4. Project memberships, at most one role per (user, project)
    op.create_table(
        "user_project_roles",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("project_id", sa.Uuid(), nullable=False),
        sa.Column(
            "role",
            sqlmodel.sql.sqltypes.AutoString(length=20),
            nullable=False,
            server_default="MEMBER",
        ),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "project_id", name="uq_user_project_role"),
    )
    op.create_index(
        "ix_user_project_roles_user_id", "user_project_roles", ["user_id"], unique=False
    )
    op.create_index(
        "ix_user_project_roles_project_id", "user_project_roles", ["project_id"], unique=False
    )


def downgrade() -> None:
    op.drop_index("ix_user_project_roles_project_id", table_name="user_project_roles")
    op.drop_index("ix_user_project_roles_user_id", table_name="user_project_roles")
    op.drop_table("user_project_roles")
    op.drop_index("ix_projects_created_at", table_name="projects")
    op.drop_table("projects")
    op.drop_index("ix_reset_tokens_expires_at", table_name="reset_tokens")
    op.drop_index("ix_reset_tokens_token_hash", table_name="reset_tokens")
    op.drop_index("ix_reset_tokens_user_id", table_name="reset_tokens")
    op.drop_table("reset_tokens")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
