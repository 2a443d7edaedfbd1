from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, DateTime, Float, ForeignKey, Index, Integer, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from app.core.formatting import DEFAULT_WEIGHT_UNIT, resolve_weight_unit
from app.db.models.workout import utcnow
from app.db.session import Base

if TYPE_CHECKING:
    from app.db.models.workout_exercise import WorkoutExercise


class WorkoutSet(Base):
    __tablename__ = "sets"
    __table_args__ = (
        CheckConstraint("rir IS NULL OR rir BETWEEN 0 AND 10", name="ck_sets_rir_range"),
        CheckConstraint(
            "rpe IS NULL OR (rpe BETWEEN 1 AND 10 AND CAST(rpe * 2 AS INTEGER) = rpe * 2)",
            name="ck_sets_rpe_half_steps",
        ),
        CheckConstraint("completed IN (0, 1)", name="ck_sets_completed_flag"),
        Index("sets_workout_exercise_id_idx", "workout_exercise_id"),
        Index("sets_set_number_idx", "workout_exercise_id", "set_number"),
        Index("sets_completed_at_idx", "completed_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    workout_exercise_id: Mapped[int] = mapped_column(
        ForeignKey("workout_exercises.id", ondelete="CASCADE"),
        nullable=False,
    )
    set_number: Mapped[int] = mapped_column(Integer, nullable=False, default=1, server_default="1")
    reps: Mapped[int | None] = mapped_column(Integer, nullable=True)
    weight: Mapped[float | None] = mapped_column(Float, nullable=True)
    weight_unit: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        default=DEFAULT_WEIGHT_UNIT,
        server_default=DEFAULT_WEIGHT_UNIT,
    )
    rir: Mapped[int | None] = mapped_column(Integer, nullable=True)
    rpe: Mapped[float | None] = mapped_column(Float, nullable=True)
    duration: Mapped[int | None] = mapped_column(Integer, nullable=True)
    distance: Mapped[float | None] = mapped_column(Float, nullable=True)
    distance_unit: Mapped[str | None] = mapped_column(Text, nullable=True)
    tempo: Mapped[str | None] = mapped_column(Text, nullable=True)
    rest_time: Mapped[int | None] = mapped_column(Integer, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    # 0 = skipped, 1 = performed
    completed: Mapped[int] = mapped_column(Integer, nullable=False, default=1, server_default="1")
    completed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    workout_exercise: Mapped[WorkoutExercise] = relationship(back_populates="sets")

    @validates("weight_unit")
    def _default_weight_unit(self, _key: str, value: str | None) -> str:
        return resolve_weight_unit(value)
