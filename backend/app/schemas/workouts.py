from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, computed_field

from app.core.formatting import format_duration, summarize_exercise_sets
from app.db.models.enums import Equipment, ExerciseType, MuscleGroup

WORKOUT_NAME_MAX_LENGTH = 200
WORKOUT_NOTES_MAX_LENGTH = 1000


class WorkoutCreateRequest(BaseModel):
    name: str = Field(min_length=1, max_length=WORKOUT_NAME_MAX_LENGTH)
    notes: str | None = Field(default=None, max_length=WORKOUT_NOTES_MAX_LENGTH)


class WorkoutUpdateRequest(WorkoutCreateRequest):
    workout_id: int = Field(gt=0)


class ExerciseRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None
    type: ExerciseType
    primary_muscle_group: MuscleGroup
    secondary_muscle_group: MuscleGroup | None
    equipment: Equipment
    instructions: str | None
    video_url: str | None
    is_custom: int
    created_by: str | None


class SetRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    set_number: int
    reps: int | None
    weight: float | None
    weight_unit: str | None
    rir: int | None
    rpe: float | None
    duration: int | None
    distance: float | None
    distance_unit: str | None
    tempo: str | None
    rest_time: int | None
    notes: str | None
    completed: int


class WorkoutExerciseRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    order_index: int
    notes: str | None
    target_sets: int | None
    target_reps: int | None
    target_weight: float | None
    target_weight_unit: str | None
    exercise: ExerciseRead
    sets: list[SetRead] = Field(default_factory=list)

    @computed_field
    @property
    def summary(self) -> str:
        return summarize_exercise_sets(self.sets)


class WorkoutRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str | None
    notes: str | None
    started_at: datetime
    completed_at: datetime | None
    duration: int | None

    @computed_field
    @property
    def duration_display(self) -> str | None:
        if self.duration is None:
            return None
        return format_duration(self.duration)


class WorkoutWithDetails(WorkoutRead):
    workout_exercises: list[WorkoutExerciseRead] = Field(default_factory=list)


class WorkoutMutationResponse(BaseModel):
    workout: WorkoutRead
    redirect_to: str = "/dashboard"
