"""Add subject_membership - role and group memberships mirrored from identity.

Revision ID: 002
Revises: 001
Create Date: 2026-09-21

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

revision: str = "002"
down_revision: str | None = "001"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "subject_membership",
        sa.Column("subject_id", sa.String(255), primary_key=True),
        sa.Column("kind", sa.String(20), primary_key=True),
        sa.Column("ref", sa.String(255), primary_key=True),
        sa.CheckConstraint("kind IN ('role', 'group')", name="ck_subject_membership_kind"),
    )
    op.create_index("ix_subject_membership_kind_ref", "subject_membership", ["kind", "ref"])


def downgrade() -> None:
    op.drop_table("subject_membership")
