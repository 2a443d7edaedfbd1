"""Workout data access, always scoped to an explicitly passed principal.

Functions take the caller as a ``Principal | None`` argument instead of
reading request state, so ownership filtering can be exercised directly.
Every function rejects a missing principal before doing anything else.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from datetime import date as date_cls
import logging

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import ValidationError
from app.core.security import Principal, require_principal
from app.core.timewindow import resolve_date_window
from app.db.models.exercise import Exercise
from app.db.models.workout import Workout, utcnow
from app.db.models.workout_exercise import WorkoutExercise
from app.db.models.workout_set import WorkoutSet
from app.schemas.workouts import (
    ExerciseRead,
    SetRead,
    WorkoutCreateRequest,
    WorkoutExerciseRead,
    WorkoutRead,
    WorkoutUpdateRequest,
    WorkoutWithDetails,
)

logger = logging.getLogger("workoutlog.domain")


def _validate(model: type[WorkoutCreateRequest], **fields) -> WorkoutCreateRequest:
    try:
        return model.model_validate(fields)
    except PydanticValidationError as exc:
        raise ValidationError(exc.errors(include_url=False)) from None


def workout_sort_key(workout: Workout) -> tuple:
    return (workout.started_at, workout.id)


def workout_exercise_sort_key(workout_exercise: WorkoutExercise) -> tuple:
    return (workout_exercise.order_index, workout_exercise.id)


def set_sort_key(workout_set: WorkoutSet) -> tuple:
    return (workout_set.set_number, workout_set.id)


def order_workouts(workouts: Iterable[Workout]) -> list[Workout]:
    """Most recently started first."""
    return sorted(workouts, key=workout_sort_key, reverse=True)


def order_workout_exercises(workout_exercises: Iterable[WorkoutExercise]) -> list[WorkoutExercise]:
    return sorted(workout_exercises, key=workout_exercise_sort_key)


def order_sets(sets: Iterable[WorkoutSet]) -> list[WorkoutSet]:
    return sorted(sets, key=set_sort_key)


def list_workouts_for_date(
    db: Session,
    principal: Principal | None,
    day: date_cls,
    tz_name: str,
) -> list[WorkoutWithDetails]:
    principal = require_principal(principal)
    window = resolve_date_window(day, tz_name)

    workouts = db.execute(
        select(Workout)
        .where(
            Workout.user_id == principal.user_id,
            Workout.started_at >= window.start_utc,
            Workout.started_at < window.end_utc,
        )
        .order_by(Workout.started_at.desc(), Workout.id.desc())
    ).scalars().all()

    logger.info(
        "domain_event event=workouts_listed user_id=%s date=%s tz=%s workout_count=%s",
        principal.user_id,
        day.isoformat(),
        tz_name,
        len(workouts),
    )
    if not workouts:
        return []

    workout_ids = [w.id for w in workouts]
    exercise_rows = db.execute(
        select(WorkoutExercise, Exercise)
        .join(Exercise, Exercise.id == WorkoutExercise.exercise_id)
        .where(WorkoutExercise.workout_id.in_(workout_ids))
    ).all()

    workout_exercise_ids = [we.id for we, _ in exercise_rows]
    sets_by_workout_exercise: dict[int, list[WorkoutSet]] = defaultdict(list)
    if workout_exercise_ids:
        set_rows = db.execute(
            select(WorkoutSet).where(WorkoutSet.workout_exercise_id.in_(workout_exercise_ids))
        ).scalars().all()
        for set_row in set_rows:
            sets_by_workout_exercise[set_row.workout_exercise_id].append(set_row)

    exercises_by_id: dict[int, Exercise] = {}
    workout_exercises_by_workout: dict[int, list[WorkoutExercise]] = defaultdict(list)
    for workout_exercise, exercise in exercise_rows:
        exercises_by_id[exercise.id] = exercise
        workout_exercises_by_workout[workout_exercise.workout_id].append(workout_exercise)

    results: list[WorkoutWithDetails] = []
    for workout in order_workouts(workouts):
        details = [
            WorkoutExerciseRead(
                id=we.id,
                order_index=we.order_index,
                notes=we.notes,
                target_sets=we.target_sets,
                target_reps=we.target_reps,
                target_weight=we.target_weight,
                target_weight_unit=we.target_weight_unit,
                exercise=ExerciseRead.model_validate(exercises_by_id[we.exercise_id]),
                sets=[SetRead.model_validate(s) for s in order_sets(sets_by_workout_exercise[we.id])],
            )
            for we in order_workout_exercises(workout_exercises_by_workout[workout.id])
        ]
        results.append(
            WorkoutWithDetails(
                id=workout.id,
                name=workout.name,
                notes=workout.notes,
                started_at=workout.started_at,
                completed_at=workout.completed_at,
                duration=workout.duration,
                workout_exercises=details,
            )
        )
    return results


def get_workout_by_id(
    db: Session,
    principal: Principal | None,
    workout_id: int,
) -> WorkoutRead | None:
    principal = require_principal(principal)
    workout = db.execute(
        select(Workout).where(
            Workout.id == workout_id,
            Workout.user_id == principal.user_id,
        )
    ).scalar_one_or_none()
    if workout is None:
        return None
    return WorkoutRead.model_validate(workout)


def create_workout(
    db: Session,
    principal: Principal | None,
    name: str,
    notes: str | None = None,
) -> WorkoutRead:
    principal = require_principal(principal)
    data = _validate(WorkoutCreateRequest, name=name, notes=notes)

    workout = Workout(
        user_id=principal.user_id,
        name=data.name,
        notes=data.notes,
        started_at=utcnow(),
    )
    try:
        db.add(workout)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    db.refresh(workout)
    logger.info(
        "domain_event event=workout_created user_id=%s workout_id=%s",
        principal.user_id,
        workout.id,
    )
    return WorkoutRead.model_validate(workout)


def update_workout(
    db: Session,
    principal: Principal | None,
    workout_id: int,
    name: str,
    notes: str | None = None,
) -> WorkoutRead | None:
    """Rename a workout and optionally replace its notes.

    ``notes=None`` leaves the stored notes untouched; an empty string clears
    them. Returns ``None`` when no workout with this id belongs to the caller.
    """
    principal = require_principal(principal)
    data = _validate(WorkoutUpdateRequest, workout_id=workout_id, name=name, notes=notes)

    values: dict = {"name": data.name, "updated_at": utcnow()}
    if data.notes is not None:
        values["notes"] = data.notes or None

    try:
        workout = db.execute(
            update(Workout)
            .where(
                Workout.id == data.workout_id,
                Workout.user_id == principal.user_id,
            )
            .values(**values)
            .returning(Workout)
        ).scalar_one_or_none()
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    if workout is None:
        logger.info(
            "domain_event event=workout_update_missed user_id=%s workout_id=%s",
            principal.user_id,
            data.workout_id,
        )
        return None

    logger.info(
        "domain_event event=workout_updated user_id=%s workout_id=%s",
        principal.user_id,
        workout.id,
    )
    return WorkoutRead.model_validate(workout)
