from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Float, ForeignKey, Index, Integer, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from app.core.formatting import DEFAULT_WEIGHT_UNIT, resolve_weight_unit
from app.db.session import Base

if TYPE_CHECKING:
    from app.db.models.exercise import Exercise
    from app.db.models.workout import Workout
    from app.db.models.workout_set import WorkoutSet


class WorkoutExercise(Base):
    __tablename__ = "workout_exercises"
    __table_args__ = (
        Index("workout_exercises_workout_id_idx", "workout_id"),
        Index("workout_exercises_exercise_id_idx", "exercise_id"),
        Index("workout_exercises_order_idx", "workout_id", "order_index"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    workout_id: Mapped[int] = mapped_column(
        ForeignKey("workouts.id", ondelete="CASCADE"),
        nullable=False,
    )
    exercise_id: Mapped[int] = mapped_column(
        ForeignKey("exercises.id", ondelete="RESTRICT"),
        nullable=False,
    )
    # 1-based position within the workout
    order_index: Mapped[int] = mapped_column(Integer, nullable=False, default=1, server_default="1")
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    target_sets: Mapped[int | None] = mapped_column(Integer, nullable=True)
    target_reps: Mapped[int | None] = mapped_column(Integer, nullable=True)
    target_weight: Mapped[float | None] = mapped_column(Float, nullable=True)
    target_weight_unit: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        default=DEFAULT_WEIGHT_UNIT,
        server_default=DEFAULT_WEIGHT_UNIT,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    workout: Mapped[Workout] = relationship(back_populates="workout_exercises")
    exercise: Mapped[Exercise] = relationship()
    sets: Mapped[list[WorkoutSet]] = relationship(
        back_populates="workout_exercise",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="WorkoutSet.set_number",
    )

    @validates("target_weight_unit")
    def _default_weight_unit(self, _key: str, value: str | None) -> str:
        return resolve_weight_unit(value)
