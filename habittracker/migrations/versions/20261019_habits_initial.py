"""add habits, weekday, day and completion tables

Revision ID: 20261019_habits_initial
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "20261019_habits_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "habits",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.Date(), nullable=False),
    )
    op.create_index("ix_habits_created_at", "habits", ["created_at"])

    op.create_table(
        "habit_week_days",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column(
            "habit_id",
            sa.String(length=36),
            sa.ForeignKey("habits.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("week_day", sa.Integer(), nullable=False),
        sa.UniqueConstraint("habit_id", "week_day", name="ux_habit_week_days_habit_week_day"),
        sa.CheckConstraint("week_day >= 0 AND week_day <= 6", name="ck_habit_week_days_range"),
    )
    op.create_index("ix_habit_week_days_habit_id", "habit_week_days", ["habit_id"])

    op.create_table(
        "days",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("date", sa.Date(), nullable=False, unique=True),
    )

    op.create_table(
        "day_habits",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column(
            "day_id",
            sa.String(length=36),
            sa.ForeignKey("days.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "habit_id",
            sa.String(length=36),
            sa.ForeignKey("habits.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.UniqueConstraint("day_id", "habit_id", name="ux_day_habits_day_habit"),
    )
    op.create_index("ix_day_habits_day_id", "day_habits", ["day_id"])
    op.create_index("ix_day_habits_habit_id", "day_habits", ["habit_id"])


def downgrade():
    op.drop_index("ix_day_habits_habit_id", table_name="day_habits")
    op.drop_index("ix_day_habits_day_id", table_name="day_habits")
    op.drop_table("day_habits")
    op.drop_table("days")
    op.drop_index("ix_habit_week_days_habit_id", table_name="habit_week_days")
    op.drop_table("habit_week_days")
    op.drop_index("ix_habits_created_at", table_name="habits")
    op.drop_table("habits")
