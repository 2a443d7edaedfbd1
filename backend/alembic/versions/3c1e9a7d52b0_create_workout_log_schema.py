"""create workout log schema

Revision ID: 3c1e9a7d52b0
Revises:
Create Date: 2026-01-26 19:12:03.114520

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql



# revision identifiers, used by Alembic.
revision: str = '3c1e9a7d52b0'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

EXERCISE_TYPES = ("strength", "cardio", "flexibility", "balance", "plyometric", "other")
EQUIPMENT = (
    "barbell",
    "dumbbell",
    "kettlebell",
    "machine",
    "cable",
    "bodyweight",
    "resistance_band",
    "medicine_ball",
    "box",
    "rower",
    "bike",
    "treadmill",
    "other",
    "none",
)
MUSCLE_GROUPS = (
    "chest",
    "back",
    "shoulders",
    "biceps",
    "triceps",
    "forearms",
    "abs",
    "obliques",
    "quads",
    "hamstrings",
    "glutes",
    "calves",
    "full_body",
    "cardio",
)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    ]


def upgrade() -> None:
    bind = op.get_bind()
    postgresql.ENUM(*EXERCISE_TYPES, name="exercise_type").create(bind, checkfirst=True)
    postgresql.ENUM(*EQUIPMENT, name="equipment").create(bind, checkfirst=True)
    postgresql.ENUM(*MUSCLE_GROUPS, name="muscle_group").create(bind, checkfirst=True)

    exercise_type_enum = postgresql.ENUM(*EXERCISE_TYPES, name="exercise_type", create_type=False)
    equipment_enum = postgresql.ENUM(*EQUIPMENT, name="equipment", create_type=False)
    muscle_group_enum = postgresql.ENUM(*MUSCLE_GROUPS, name="muscle_group", create_type=False)

    op.create_table(
        "exercises",
        sa.Column("id", sa.Integer(), sa.Identity(always=True), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("type", exercise_type_enum, server_default=sa.text("'strength'"), nullable=False),
        sa.Column("primary_muscle_group", muscle_group_enum, nullable=False),
        sa.Column("secondary_muscle_group", muscle_group_enum, nullable=True),
        sa.Column("equipment", equipment_enum, server_default=sa.text("'bodyweight'"), nullable=False),
        sa.Column("instructions", sa.Text(), nullable=True),
        sa.Column("video_url", sa.Text(), nullable=True),
        sa.Column("is_custom", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.Column("created_by", sa.String(length=255), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("exercises_name_idx", "exercises", ["name"], unique=False)
    op.create_index("exercises_type_idx", "exercises", ["type"], unique=False)
    op.create_index("exercises_muscle_group_idx", "exercises", ["primary_muscle_group"], unique=False)
    op.create_index("exercises_created_by_idx", "exercises", ["created_by"], unique=False)

    op.create_table(
        "workouts",
        sa.Column("id", sa.Integer(), sa.Identity(always=True), nullable=False),
        sa.Column("user_id", sa.String(length=255), nullable=False),
        sa.Column("name", sa.Text(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("started_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("duration", sa.Integer(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint(
            "completed_at IS NULL OR completed_at >= started_at",
            name="ck_workouts_completed_after_start",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("workouts_user_id_idx", "workouts", ["user_id"], unique=False)
    op.create_index("workouts_started_at_idx", "workouts", ["started_at"], unique=False)
    op.create_index("workouts_completed_at_idx", "workouts", ["completed_at"], unique=False)
    op.create_index("workouts_user_started_idx", "workouts", ["user_id", "started_at"], unique=False)

    op.create_table(
        "workout_exercises",
        sa.Column("id", sa.Integer(), sa.Identity(always=True), nullable=False),
        sa.Column("workout_id", sa.Integer(), nullable=False),
        sa.Column("exercise_id", sa.Integer(), nullable=False),
        sa.Column("order_index", sa.Integer(), server_default=sa.text("1"), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("target_sets", sa.Integer(), nullable=True),
        sa.Column("target_reps", sa.Integer(), nullable=True),
        sa.Column("target_weight", sa.Float(), nullable=True),
        sa.Column("target_weight_unit", sa.Text(), server_default=sa.text("'lbs'"), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["workout_id"], ["workouts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["exercise_id"], ["exercises.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("workout_exercises_workout_id_idx", "workout_exercises", ["workout_id"], unique=False)
    op.create_index("workout_exercises_exercise_id_idx", "workout_exercises", ["exercise_id"], unique=False)
    op.create_index("workout_exercises_order_idx", "workout_exercises", ["workout_id", "order_index"], unique=False)

    op.create_table(
        "sets",
        sa.Column("id", sa.Integer(), sa.Identity(always=True), nullable=False),
        sa.Column("workout_exercise_id", sa.Integer(), nullable=False),
        sa.Column("set_number", sa.Integer(), server_default=sa.text("1"), nullable=False),
        sa.Column("reps", sa.Integer(), nullable=True),
        sa.Column("weight", sa.Float(), nullable=True),
        sa.Column("weight_unit", sa.Text(), server_default=sa.text("'lbs'"), nullable=True),
        sa.Column("rir", sa.Integer(), nullable=True),
        sa.Column("rpe", sa.Float(), nullable=True),
        sa.Column("duration", sa.Integer(), nullable=True),
        sa.Column("distance", sa.Float(), nullable=True),
        sa.Column("distance_unit", sa.Text(), nullable=True),
        sa.Column("tempo", sa.Text(), nullable=True),
        sa.Column("rest_time", sa.Integer(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("completed", sa.Integer(), server_default=sa.text("1"), nullable=False),
        sa.Column("completed_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("rir IS NULL OR rir BETWEEN 0 AND 10", name="ck_sets_rir_range"),
        sa.CheckConstraint(
            "rpe IS NULL OR (rpe BETWEEN 1 AND 10 AND CAST(rpe * 2 AS INTEGER) = rpe * 2)",
            name="ck_sets_rpe_half_steps",
        ),
        sa.CheckConstraint("completed IN (0, 1)", name="ck_sets_completed_flag"),
        sa.ForeignKeyConstraint(["workout_exercise_id"], ["workout_exercises.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("sets_workout_exercise_id_idx", "sets", ["workout_exercise_id"], unique=False)
    op.create_index("sets_set_number_idx", "sets", ["workout_exercise_id", "set_number"], unique=False)
    op.create_index("sets_completed_at_idx", "sets", ["completed_at"], unique=False)


def downgrade() -> None:
    op.drop_index("sets_completed_at_idx", table_name="sets")
    op.drop_index("sets_set_number_idx", table_name="sets")
    op.drop_index("sets_workout_exercise_id_idx", table_name="sets")
    op.drop_table("sets")
    op.drop_index("workout_exercises_order_idx", table_name="workout_exercises")
    op.drop_index("workout_exercises_exercise_id_idx", table_name="workout_exercises")
    op.drop_index("workout_exercises_workout_id_idx", table_name="workout_exercises")
    op.drop_table("workout_exercises")
    op.drop_index("workouts_user_started_idx", table_name="workouts")
    op.drop_index("workouts_completed_at_idx", table_name="workouts")
    op.drop_index("workouts_started_at_idx", table_name="workouts")
    op.drop_index("workouts_user_id_idx", table_name="workouts")
    op.drop_table("workouts")
    op.drop_index("exercises_created_by_idx", table_name="exercises")
    op.drop_index("exercises_muscle_group_idx", table_name="exercises")
    op.drop_index("exercises_type_idx", table_name="exercises")
    op.drop_index("exercises_name_idx", table_name="exercises")
    op.drop_table("exercises")
    bind = op.get_bind()
    postgresql.ENUM(name="muscle_group").drop(bind, checkfirst=True)
    postgresql.ENUM(name="equipment").drop(bind, checkfirst=True)
    postgresql.ENUM(name="exercise_type").drop(bind, checkfirst=True)
