"""add personal_records and badge_unlocks

Revision ID: 0002
Revises: 0001
Create Date: 2026-03-02 00:00:00.000000

Both tables carry the unique keys that make PR inserts and badge unlocks
atomic under concurrent writers.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "0002"
down_revision: Union[str, None] = "0001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    pr_type_enum = sa.Enum(
        "max_weight", "max_volume", "estimated_1rm", name="pr_type_enum"
    )
    pr_type_enum.create(op.get_bind(), checkfirst=True)

    op.create_table(
        "personal_records",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("exercise_name", sa.String(128), nullable=False),
        sa.Column("pr_type", sa.Enum(
            "max_weight", "max_volume", "estimated_1rm", name="pr_type_enum", create_type=False
        ), nullable=False),
        sa.Column("value", sa.Float(), nullable=False),
        sa.Column("reps", sa.Integer(), nullable=True),
        sa.Column("exercise_log_id", sa.Integer(), nullable=True),
        sa.Column("achieved_date", sa.Date(), nullable=False),
        sa.Column("previous_value", sa.Float(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["exercise_log_id"], ["exercise_logs.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("exercise_name", "pr_type", name="uq_personal_record_exercise_type"),
    )
    op.create_index("ix_personal_records_id", "personal_records", ["id"])
    op.create_index("ix_personal_records_exercise_name", "personal_records", ["exercise_name"])
    op.create_index("ix_personal_records_achieved_date", "personal_records", ["achieved_date"])

    op.create_table(
        "badge_unlocks",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("achievement_id", sa.String(64), nullable=False),
        sa.Column("chain_id", sa.String(32), nullable=False),
        sa.Column("milestone", sa.Integer(), nullable=False),
        sa.Column("statistic_value", sa.Integer(), nullable=False),
        sa.Column("notified", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("unlocked_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_badge_unlocks_id", "badge_unlocks", ["id"])
    op.create_index("ix_badge_unlocks_achievement_id", "badge_unlocks", ["achievement_id"], unique=True)
    op.create_index("ix_badge_unlocks_chain_id", "badge_unlocks", ["chain_id"])


def downgrade() -> None:
    op.drop_table("badge_unlocks")
    op.drop_table("personal_records")
    op.execute("DROP TYPE IF EXISTS pr_type_enum")
