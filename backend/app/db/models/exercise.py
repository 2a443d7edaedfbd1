from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Enum, Index, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.models.enums import Equipment, ExerciseType, MuscleGroup, enum_values
from app.db.session import Base


class Exercise(Base):
    __tablename__ = "exercises"
    __table_args__ = (
        Index("exercises_name_idx", "name"),
        Index("exercises_type_idx", "type"),
        Index("exercises_muscle_group_idx", "primary_muscle_group"),
        Index("exercises_created_by_idx", "created_by"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    type: Mapped[ExerciseType] = mapped_column(
        Enum(ExerciseType, name="exercise_type", values_callable=enum_values),
        nullable=False,
        default=ExerciseType.STRENGTH,
        server_default=ExerciseType.STRENGTH.value,
    )
    primary_muscle_group: Mapped[MuscleGroup] = mapped_column(
        Enum(MuscleGroup, name="muscle_group", values_callable=enum_values),
        nullable=False,
    )
    secondary_muscle_group: Mapped[MuscleGroup | None] = mapped_column(
        Enum(MuscleGroup, name="muscle_group", values_callable=enum_values),
        nullable=True,
    )
    equipment: Mapped[Equipment] = mapped_column(
        Enum(Equipment, name="equipment", values_callable=enum_values),
        nullable=False,
        default=Equipment.BODYWEIGHT,
        server_default=Equipment.BODYWEIGHT.value,
    )
    instructions: Mapped[str | None] = mapped_column(Text, nullable=True)
    video_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    # 0 = global catalog entry, 1 = user-defined (created_by is then set)
    is_custom: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    created_by: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
