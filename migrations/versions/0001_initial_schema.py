"""initial schema

Revision ID: 0001
Revises:
Create Date: 2026-02-20 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # --- ENUM types ---
    muscle_group_enum = sa.Enum(
        "chest", "back", "shoulders", "arms", "legs", "core", "cardio", "full_body",
        name="muscle_group_enum",
    )
    muscle_group_enum.create(op.get_bind(), checkfirst=True)

    meal_type_enum = sa.Enum("breakfast", "lunch", "dinner", "snack", name="meal_type_enum")
    meal_type_enum.create(op.get_bind(), checkfirst=True)

    reminder_category_enum = sa.Enum(
        "medicine", "supplement", "workout", "meal", "water", "custom",
        name="reminder_category_enum",
    )
    reminder_category_enum.create(op.get_bind(), checkfirst=True)

    reminder_frequency_enum = sa.Enum(
        "once", "daily", "weekly", "monthly", name="reminder_frequency_enum"
    )
    reminder_frequency_enum.create(op.get_bind(), checkfirst=True)

    reminder_status_enum = sa.Enum(
        "completed", "missed", "skipped", "snoozed", name="reminder_status_enum"
    )
    reminder_status_enum.create(op.get_bind(), checkfirst=True)

    # --- exercise_logs ---
    op.create_table(
        "exercise_logs",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("day", sa.Date(), nullable=False),
        sa.Column("exercise_name", sa.String(128), nullable=False),
        sa.Column("muscle_group", sa.Enum(
            "chest", "back", "shoulders", "arms", "legs", "core", "cardio", "full_body",
            name="muscle_group_enum", create_type=False,
        ), nullable=True),
        sa.Column("sets", sa.Integer(), nullable=False),
        sa.Column("reps", sa.Integer(), nullable=False),
        sa.Column("weight", sa.Float(), nullable=True, comment="kg"),
        sa.Column("duration", sa.Float(), nullable=True, comment="minutes"),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_exercise_logs_id", "exercise_logs", ["id"])
    op.create_index("ix_exercise_logs_day", "exercise_logs", ["day"])
    op.create_index("ix_exercise_logs_muscle_group", "exercise_logs", ["muscle_group"])

    # --- meal_logs ---
    op.create_table(
        "meal_logs",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("day", sa.Date(), nullable=False),
        sa.Column("meal_type", sa.Enum(
            "breakfast", "lunch", "dinner", "snack", name="meal_type_enum", create_type=False
        ), nullable=False),
        sa.Column("food_name", sa.String(256), nullable=False),
        sa.Column("quantity", sa.String(64), nullable=True),
        sa.Column("calories", sa.Float(), nullable=False),
        sa.Column("protein", sa.Float(), nullable=False, comment="grams"),
        sa.Column("carbs", sa.Float(), nullable=False, comment="grams"),
        sa.Column("fat", sa.Float(), nullable=False, comment="grams"),
        sa.Column("fiber", sa.Float(), nullable=True, comment="grams"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_meal_logs_id", "meal_logs", ["id"])
    op.create_index("ix_meal_logs_day", "meal_logs", ["day"])

    # --- reminders ---
    op.create_table(
        "reminders",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(256), nullable=False),
        sa.Column("category", sa.Enum(
            "medicine", "supplement", "workout", "meal", "water", "custom",
            name="reminder_category_enum", create_type=False,
        ), nullable=False),
        sa.Column("frequency", sa.Enum(
            "once", "daily", "weekly", "monthly", name="reminder_frequency_enum", create_type=False
        ), nullable=False),
        sa.Column("time", sa.String(5), nullable=False, comment='"HH:MM", 24h'),
        sa.Column("repeat_days", sa.JSON(), nullable=True),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("is_paused", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_reminders_id", "reminders", ["id"])
    op.create_index("ix_reminders_is_active", "reminders", ["is_active"])

    # --- reminder_logs ---
    op.create_table(
        "reminder_logs",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("reminder_id", sa.Integer(), nullable=False),
        sa.Column("day", sa.Date(), nullable=False),
        sa.Column("scheduled_time", sa.String(5), nullable=False),
        sa.Column("status", sa.Enum(
            "completed", "missed", "skipped", "snoozed",
            name="reminder_status_enum", create_type=False,
        ), nullable=False),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(["reminder_id"], ["reminders.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_reminder_logs_id", "reminder_logs", ["id"])
    op.create_index("ix_reminder_logs_reminder_id", "reminder_logs", ["reminder_id"])
    op.create_index("ix_reminder_logs_day", "reminder_logs", ["day"])

    # --- user_profile ---
    op.create_table(
        "user_profile",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(128), nullable=False),
        sa.Column("height", sa.Float(), nullable=True, comment="cm"),
        sa.Column("weight", sa.Float(), nullable=True, comment="kg"),
        sa.Column("daily_calorie_target", sa.Integer(), nullable=True),
        sa.Column("protein_target", sa.Integer(), nullable=True),
        sa.Column("carbs_target", sa.Integer(), nullable=True),
        sa.Column("fat_target", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_user_profile_id", "user_profile", ["id"])


def downgrade() -> None:
    op.drop_table("user_profile")
    op.drop_table("reminder_logs")
    op.drop_table("reminders")
    op.drop_table("meal_logs")
    op.drop_table("exercise_logs")

    op.execute("DROP TYPE IF EXISTS reminder_status_enum")
    op.execute("DROP TYPE IF EXISTS reminder_frequency_enum")
    op.execute("DROP TYPE IF EXISTS reminder_category_enum")
    op.execute("DROP TYPE IF EXISTS meal_type_enum")
    op.execute("DROP TYPE IF EXISTS muscle_group_enum")
