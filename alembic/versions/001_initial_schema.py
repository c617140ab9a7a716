"""Initial schema - resource, permission_source, conflict_resolution, audit_log.

Revision ID: 001
Revises:
Create Date: 2026-09-14

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "resource",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("kind", sa.String(20), nullable=False),
        sa.Column("parent_id", sa.UUID(), sa.ForeignKey("resource.id"), nullable=True),
        sa.Column("name", sa.String(255), nullable=False, server_default=""),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("kind IN ('folder', 'document')", name="ck_resource_kind"),
        sa.CheckConstraint("parent_id IS NULL OR parent_id <> id", name="ck_resource_not_self_parent"),
    )
    op.create_index("ix_resource_parent_id", "resource", ["parent_id"])

    op.create_table(
        "permission_source",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("resource_id", sa.UUID(), sa.ForeignKey("resource.id", ondelete="CASCADE"), nullable=False),
        sa.Column("subject_ref", sa.String(255), nullable=False),
        sa.Column("kind", sa.String(20), nullable=False),
        sa.Column("priority", sa.Integer(), nullable=False),
        sa.Column("permissions", sa.JSON(), nullable=False),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("name", sa.String(255), nullable=False, server_default=""),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_by", sa.String(255), nullable=True),
        sa.CheckConstraint("kind IN ('direct', 'role', 'group')", name="ck_permission_source_kind"),
        sa.CheckConstraint("priority >= 0", name="ck_permission_source_priority"),
    )
    op.create_index("ix_permission_source_resource_id", "permission_source", ["resource_id"])

    op.create_table(
        "conflict_resolution",
        sa.Column("conflict_id", sa.UUID(), primary_key=True),
        sa.Column("conflict_type", sa.String(50), nullable=False),
        sa.Column("resource_id", sa.UUID(), sa.ForeignKey("resource.id", ondelete="CASCADE"), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("mode", sa.String(50), nullable=False),
        sa.Column("resolved_by", sa.String(255), nullable=False),
        sa.Column("resolved_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("reason", sa.Text(), nullable=True),
        sa.Column("source_ids", sa.JSON(), nullable=False),
    )
    op.create_index("ix_conflict_resolution_resource_id", "conflict_resolution", ["resource_id"])

    op.create_table(
        "audit_log",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("action", sa.String(100), nullable=False),
        sa.Column("actor", sa.String(255), nullable=False),
        sa.Column("resource_id", sa.UUID(), nullable=True),
        sa.Column("target_id", sa.UUID(), nullable=True),
        sa.Column("before", sa.JSON(), nullable=True),
        sa.Column("after", sa.JSON(), nullable=True),
        sa.Column("reason", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_audit_log_resource_id", "audit_log", ["resource_id"])


def downgrade() -> None:
    op.drop_table("audit_log")
    op.drop_table("conflict_resolution")
    op.drop_table("permission_source")
    op.drop_table("resource")
