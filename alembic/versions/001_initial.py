"""Initial schema: users, prospects, workspaces, workspace_members, workspace_prospects.

Revision ID: 001
Revises:
Create Date: 2026-10-18

Member and link rows cascade with their workspace; link rows also cascade
with their prospect.
"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_users_email", "users", ["email"])

    op.create_table(
        "prospects",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "owner_id",
            sa.String(64),
            sa.ForeignKey("users.id", name="fk_prospects_owner_id"),
            nullable=False,
        ),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("status", sa.String(32), nullable=False, server_default="prospect"),
        sa.Column("notes", sa.Text(), nullable=False, server_default=""),
        sa.Column("geometry", sa.JSON(), nullable=False),
        sa.Column("submarket_id", sa.String(64), nullable=True),
        sa.Column("last_contact_date", sa.String(32), nullable=True),
        sa.Column("follow_up_timeframe", sa.String(16), nullable=True),
        sa.Column("follow_up_due_date", sa.String(32), nullable=True),
        sa.Column("contact_name", sa.String(255), nullable=True),
        sa.Column("contact_email", sa.String(255), nullable=True),
        sa.Column("contact_phone", sa.String(64), nullable=True),
        sa.Column("contact_company", sa.String(255), nullable=True),
        sa.Column("size", sa.String(64), nullable=True),
        sa.Column("acres", sa.String(32), nullable=True),
        sa.Column("business_name", sa.String(255), nullable=True),
        sa.Column("website_url", sa.String(2048), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_prospects_owner_id", "prospects", ["owner_id"])

    op.create_table(
        "workspaces",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "owner_id",
            sa.String(64),
            sa.ForeignKey("users.id", name="fk_workspaces_owner_id"),
            nullable=False,
        ),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("address", sa.String(512), nullable=True),
        sa.Column("lat", sa.String(32), nullable=True),
        sa.Column("lng", sa.String(32), nullable=True),
        sa.Column("submarket", sa.String(255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("archived_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_workspaces_owner_id", "workspaces", ["owner_id"])

    op.create_table(
        "workspace_members",
        sa.Column("workspace_id", sa.String(36), nullable=False),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("role", sa.String(16), nullable=False, server_default="viewer"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("workspace_id", "user_id"),
        sa.ForeignKeyConstraint(
            ["workspace_id"],
            ["workspaces.id"],
            name="fk_workspace_members_workspace_id",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["users.id"],
            name="fk_workspace_members_user_id",
            ondelete="CASCADE",
        ),
        sa.CheckConstraint("role IN ('editor', 'viewer')", name="ck_workspace_members_role"),
    )
    op.create_index("ix_workspace_members_user_id", "workspace_members", ["user_id"])

    op.create_table(
        "workspace_prospects",
        sa.Column("workspace_id", sa.String(36), nullable=False),
        sa.Column("prospect_id", sa.String(36), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("workspace_id", "prospect_id"),
        sa.ForeignKeyConstraint(
            ["workspace_id"],
            ["workspaces.id"],
            name="fk_workspace_prospects_workspace_id",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["prospect_id"],
            ["prospects.id"],
            name="fk_workspace_prospects_prospect_id",
            ondelete="CASCADE",
        ),
    )
    op.create_index("ix_workspace_prospects_prospect_id", "workspace_prospects", ["prospect_id"])


def downgrade() -> None:
    op.drop_index("ix_workspace_prospects_prospect_id", table_name="workspace_prospects")
    op.drop_table("workspace_prospects")
    op.drop_index("ix_workspace_members_user_id", table_name="workspace_members")
    op.drop_table("workspace_members")
    op.drop_index("ix_workspaces_owner_id", table_name="workspaces")
    op.drop_table("workspaces")
    op.drop_index("ix_prospects_owner_id", table_name="prospects")
    op.drop_table("prospects")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
