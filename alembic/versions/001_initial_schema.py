"""Initial schema — workers and assignments.

Revision ID: 001
Revises: None
Create Date: 2026-10-19
"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Workers (roster)
    op.create_table(
        "workers",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("email", sa.String(255), unique=True, nullable=False),
        sa.Column("mobile", sa.String(32), unique=True, nullable=False),
        sa.Column(
            "created_at", sa.DateTime, nullable=False, server_default=sa.func.now()
        ),
    )

    # Assignments (call queue + generic lists)
    op.create_table(
        "assignments",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("kind", sa.String(20), nullable=False),
        sa.Column("ordinal", sa.Numeric, nullable=True),
        sa.Column("display_name", sa.Text, nullable=False),
        sa.Column("contact_number", sa.Text, nullable=False),
        sa.Column("email_address", sa.Text, nullable=True),
        sa.Column("freeform_note", sa.Text, nullable=False, server_default=""),
        sa.Column(
            "worker_id",
            sa.Integer,
            sa.ForeignKey("workers.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column(
            "created_at", sa.DateTime, nullable=False, server_default=sa.func.now()
        ),
        sa.Column(
            "updated_at", sa.DateTime, nullable=False, server_default=sa.func.now()
        ),
        sa.UniqueConstraint("kind", "ordinal", name="uq_assignments_kind_ordinal"),
    )
    op.create_index("idx_assignments_worker", "assignments", ["worker_id"])
    op.create_index("idx_assignments_status", "assignments", ["status"])


def downgrade() -> None:
    op.drop_index("idx_assignments_status", table_name="assignments")
    op.drop_index("idx_assignments_worker", table_name="assignments")
    op.drop_table("assignments")
    op.drop_table("workers")
