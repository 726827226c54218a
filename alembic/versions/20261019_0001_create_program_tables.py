"""create program tables

Revision ID: 20261019_0001
Revises: 
Create Date: 2026-10-19
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "20261019_0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    op.create_table(
        "step_progress",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("step_number", sa.Integer(), nullable=False),
        sa.Column("step_name", sa.String(length=255), nullable=False, server_default=""),
        sa.Column("completed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("completed_at", sa.DateTime(), nullable=True),
        sa.Column("available", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.UniqueConstraint("user_id", "step_number", name="uq_step_progress_user_step"),
    )
    op.create_index("ix_step_progress_user_id", "step_progress", ["user_id"], unique=False)
    op.create_index("ix_step_progress_step_number", "step_progress", ["step_number"], unique=False)

    op.create_table(
        "step_answers",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("namespace", sa.String(length=128), nullable=False),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("discriminator", sa.String(length=64), nullable=False, server_default=""),
        sa.Column("payload_json", sa.Text(), nullable=False, server_default="{}"),
        *_timestamps(),
        sa.UniqueConstraint("namespace", "user_id", "discriminator", name="uq_step_answer_namespace_user_disc"),
    )
    op.create_index("ix_step_answers_namespace", "step_answers", ["namespace"], unique=False)
    op.create_index("ix_step_answers_user_id", "step_answers", ["user_id"], unique=False)

    op.create_table(
        "habit_definitions",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("key", sa.String(length=64), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("category", sa.String(length=32), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
    )
    op.create_index("ix_habit_definitions_key", "habit_definitions", ["key"], unique=True)
    op.create_index("ix_habit_definitions_category", "habit_definitions", ["category"], unique=False)

    op.create_table(
        "focused_habits",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("habit_key", sa.String(length=64), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("user_id", "habit_key", name="uq_focused_habit_user_habit"),
    )
    op.create_index("ix_focused_habits_user_id", "focused_habits", ["user_id"], unique=False)
    op.create_index("ix_focused_habits_habit_key", "focused_habits", ["habit_key"], unique=False)

    op.create_table(
        "habit_assessments",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("category", sa.String(length=32), nullable=False),
        sa.Column("question_1_answer", sa.String(length=8), nullable=False),
        sa.Column("question_2_answer", sa.String(length=8), nullable=False),
        sa.Column("question_3_answer", sa.String(length=8), nullable=True),
        sa.Column("identified_habit", sa.Text(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_habit_assessments_user_id", "habit_assessments", ["user_id"], unique=False)
    op.create_index("ix_habit_assessments_category", "habit_assessments", ["category"], unique=False)

    op.create_table(
        "habit_systems",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("habit_key", sa.String(length=64), nullable=False),
        sa.Column("current_week", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("obstacles", sa.Text(), nullable=False, server_default=""),
        sa.Column("strategies", sa.Text(), nullable=False, server_default=""),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.UniqueConstraint("user_id", "habit_key", name="uq_habit_system_user_habit"),
    )
    op.create_index("ix_habit_systems_user_id", "habit_systems", ["user_id"], unique=False)
    op.create_index("ix_habit_systems_habit_key", "habit_systems", ["habit_key"], unique=False)

    op.create_table(
        "habit_day_plans",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("habit_key", sa.String(length=64), nullable=False),
        sa.Column("plan_type", sa.String(length=16), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("obstacles_json", sa.Text(), nullable=False, server_default="[]"),
        *_timestamps(),
    )
    op.create_index("ix_habit_day_plans_user_id", "habit_day_plans", ["user_id"], unique=False)
    op.create_index("ix_habit_day_plans_habit_key", "habit_day_plans", ["habit_key"], unique=False)
    op.create_index("ix_habit_day_plans_plan_type", "habit_day_plans", ["plan_type"], unique=False)

    op.create_table(
        "habit_weekly_steps",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("habit_key", sa.String(length=64), nullable=False),
        sa.Column("week_number", sa.Integer(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False, server_default=""),
        *_timestamps(),
        sa.UniqueConstraint("user_id", "habit_key", "week_number", name="uq_habit_weekly_step_user_habit_week"),
    )
    op.create_index("ix_habit_weekly_steps_user_id", "habit_weekly_steps", ["user_id"], unique=False)
    op.create_index("ix_habit_weekly_steps_habit_key", "habit_weekly_steps", ["habit_key"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_habit_weekly_steps_habit_key", table_name="habit_weekly_steps")
    op.drop_index("ix_habit_weekly_steps_user_id", table_name="habit_weekly_steps")
    op.drop_table("habit_weekly_steps")

    op.drop_index("ix_habit_day_plans_plan_type", table_name="habit_day_plans")
    op.drop_index("ix_habit_day_plans_habit_key", table_name="habit_day_plans")
    op.drop_index("ix_habit_day_plans_user_id", table_name="habit_day_plans")
    op.drop_table("habit_day_plans")

    op.drop_index("ix_habit_systems_habit_key", table_name="habit_systems")
    op.drop_index("ix_habit_systems_user_id", table_name="habit_systems")
    op.drop_table("habit_systems")

    op.drop_index("ix_habit_assessments_category", table_name="habit_assessments")
    op.drop_index("ix_habit_assessments_user_id", table_name="habit_assessments")
    op.drop_table("habit_assessments")

    op.drop_index("ix_focused_habits_habit_key", table_name="focused_habits")
    op.drop_index("ix_focused_habits_user_id", table_name="focused_habits")
    op.drop_table("focused_habits")

    op.drop_index("ix_habit_definitions_category", table_name="habit_definitions")
    op.drop_index("ix_habit_definitions_key", table_name="habit_definitions")
    op.drop_table("habit_definitions")

    op.drop_index("ix_step_answers_user_id", table_name="step_answers")
    op.drop_index("ix_step_answers_namespace", table_name="step_answers")
    op.drop_table("step_answers")

    op.drop_index("ix_step_progress_step_number", table_name="step_progress")
    op.drop_index("ix_step_progress_user_id", table_name="step_progress")
    op.drop_table("step_progress")
