"""Load the sample exercise catalog and three logged workouts for one user.

Usage::

    workoutlog-seed --user-id user_123

``--user-id`` falls back to the ``SEED_USER_ID`` environment variable.
"""

from __future__ import annotations

import argparse
from datetime import datetime, timezone
import logging
import os

from sqlalchemy.orm import Session

from app.db.models.enums import Equipment, ExerciseType, MuscleGroup
from app.db.models.exercise import Exercise
from app.db.models.workout import Workout
from app.db.models.workout_exercise import WorkoutExercise
from app.db.models.workout_set import WorkoutSet
from app.db.session import SessionLocal

logger = logging.getLogger("workoutlog.seed")


def _utc(value: str) -> datetime:
    return datetime.fromisoformat(value).replace(tzinfo=timezone.utc)


EXERCISES = [
    {
        "name": "Back Squat",
        "description": "Barbell squat with bar on upper back",
        "type": ExerciseType.STRENGTH,
        "primary_muscle_group": MuscleGroup.QUADS,
        "secondary_muscle_group": MuscleGroup.GLUTES,
        "equipment": Equipment.BARBELL,
        "instructions": "Place bar on upper traps, squat to parallel, drive up through heels",
    },
    {
        "name": "Deadlift",
        "description": "Conventional barbell deadlift",
        "type": ExerciseType.STRENGTH,
        "primary_muscle_group": MuscleGroup.BACK,
        "secondary_muscle_group": MuscleGroup.HAMSTRINGS,
        "equipment": Equipment.BARBELL,
        "instructions": "Grip bar shoulder width, hinge at hips, keep back flat, drive through floor",
    },
    {
        "name": "Pull-ups",
        "description": "Strict pull-up from dead hang",
        "type": ExerciseType.STRENGTH,
        "primary_muscle_group": MuscleGroup.BACK,
        "secondary_muscle_group": MuscleGroup.BICEPS,
        "equipment": Equipment.BODYWEIGHT,
        "instructions": "Hang from bar, pull chin over bar, lower with control",
    },
    {
        "name": "Push Press",
        "description": "Overhead press with leg drive",
        "type": ExerciseType.STRENGTH,
        "primary_muscle_group": MuscleGroup.SHOULDERS,
        "secondary_muscle_group": MuscleGroup.TRICEPS,
        "equipment": Equipment.BARBELL,
        "instructions": "Dip knees slightly, drive bar overhead using leg momentum",
    },
    {
        "name": "Box Jumps",
        "description": "Explosive jump onto box",
        "type": ExerciseType.PLYOMETRIC,
        "primary_muscle_group": MuscleGroup.QUADS,
        "secondary_muscle_group": MuscleGroup.CALVES,
        "equipment": Equipment.BOX,
        "instructions": "Stand facing box, jump and land softly with both feet, step down",
    },
    {
        "name": "Rowing",
        "description": "Concept2 rowing for cardio",
        "type": ExerciseType.CARDIO,
        "primary_muscle_group": MuscleGroup.FULL_BODY,
        "secondary_muscle_group": None,
        "equipment": Equipment.ROWER,
        "instructions": "Drive with legs, lean back, pull handle to chest, reverse sequence",
    },
]

WORKOUTS = [
    {
        "name": "Leg Day",
        "notes": "Focus on squat depth",
        "started_at": _utc("2026-01-27T08:00:00"),
        "completed_at": _utc("2026-01-27T09:15:00"),
        "duration": 75 * 60,
    },
    {
        "name": "Pull Day",
        "notes": "Back and biceps emphasis",
        "started_at": _utc("2026-01-28T07:30:00"),
        "completed_at": _utc("2026-01-28T08:45:00"),
        "duration": 75 * 60,
    },
    {
        "name": "Full Body WOD",
        "notes": "CrossFit metcon style",
        "started_at": _utc("2026-01-29T17:00:00"),
        "completed_at": _utc("2026-01-29T18:00:00"),
        "duration": 60 * 60,
    },
]

# (workout name, exercise name, fields)
WORKOUT_EXERCISES = [
    ("Leg Day", "Back Squat", {"order_index": 1, "notes": "Warm up with empty bar first", "target_sets": 5, "target_reps": 5, "target_weight": 225}),
    ("Leg Day", "Box Jumps", {"order_index": 2, "notes": "24 inch box", "target_sets": 3, "target_reps": 10}),
    ("Pull Day", "Deadlift", {"order_index": 1, "notes": "Build up to working weight", "target_sets": 5, "target_reps": 5, "target_weight": 315}),
    ("Pull Day", "Pull-ups", {"order_index": 2, "notes": "Strict, no kipping", "target_sets": 4, "target_reps": 8}),
    ("Full Body WOD", "Push Press", {"order_index": 1, "notes": "Part of the metcon", "target_sets": 3, "target_reps": 10, "target_weight": 95}),
    ("Full Body WOD", "Rowing", {"order_index": 2, "notes": "500m intervals", "target_sets": 3}),
]

SETS = [
    ("Leg Day", "Back Squat", {"set_number": 1, "reps": 5, "weight": 185, "rir": 3, "rpe": 7.0, "rest_time": 180, "notes": "Warm-up set"}),
    ("Leg Day", "Back Squat", {"set_number": 2, "reps": 5, "weight": 205, "rir": 2, "rpe": 8.0, "rest_time": 180}),
    ("Leg Day", "Back Squat", {"set_number": 3, "reps": 5, "weight": 225, "rir": 1, "rpe": 8.5, "rest_time": 180, "notes": "Hit target"}),
    ("Leg Day", "Back Squat", {"set_number": 4, "reps": 5, "weight": 225, "rir": 1, "rpe": 9.0, "rest_time": 180}),
    ("Leg Day", "Back Squat", {"set_number": 5, "reps": 5, "weight": 225, "rir": 0, "rpe": 9.5, "notes": "Last rep was a grinder"}),
    ("Leg Day", "Box Jumps", {"set_number": 1, "reps": 10, "rpe": 6.0, "rest_time": 90}),
    ("Leg Day", "Box Jumps", {"set_number": 2, "reps": 10, "rpe": 7.0, "rest_time": 90}),
    ("Leg Day", "Box Jumps", {"set_number": 3, "reps": 10, "rpe": 7.5}),
    ("Pull Day", "Deadlift", {"set_number": 1, "reps": 5, "weight": 225, "rir": 4, "rpe": 6.0, "rest_time": 180, "notes": "Warm-up"}),
    ("Pull Day", "Deadlift", {"set_number": 2, "reps": 5, "weight": 275, "rir": 2, "rpe": 7.5, "rest_time": 180}),
    ("Pull Day", "Deadlift", {"set_number": 3, "reps": 5, "weight": 315, "rir": 1, "rpe": 8.5, "rest_time": 180, "notes": "PR attempt"}),
    ("Pull Day", "Deadlift", {"set_number": 4, "reps": 5, "weight": 315, "rir": 0, "rpe": 9.0, "rest_time": 180}),
    ("Pull Day", "Deadlift", {"set_number": 5, "reps": 4, "weight": 315, "rir": 0, "rpe": 10.0, "notes": "Missed 5th rep"}),
    ("Pull Day", "Pull-ups", {"set_number": 1, "reps": 8, "rir": 2, "rpe": 7.0, "rest_time": 120}),
    ("Pull Day", "Pull-ups", {"set_number": 2, "reps": 8, "rir": 1, "rpe": 8.0, "rest_time": 120}),
    ("Pull Day", "Pull-ups", {"set_number": 3, "reps": 7, "rir": 0, "rpe": 9.0, "rest_time": 120, "notes": "Failed last rep"}),
    ("Pull Day", "Pull-ups", {"set_number": 4, "reps": 6, "rir": 0, "rpe": 9.5, "notes": "Fatigued"}),
    ("Full Body WOD", "Push Press", {"set_number": 1, "reps": 10, "weight": 95, "rpe": 7.0, "rest_time": 60}),
    ("Full Body WOD", "Push Press", {"set_number": 2, "reps": 10, "weight": 95, "rpe": 8.0, "rest_time": 60}),
    ("Full Body WOD", "Push Press", {"set_number": 3, "reps": 10, "weight": 95, "rpe": 8.5, "notes": "Unbroken"}),
    ("Full Body WOD", "Rowing", {"set_number": 1, "duration": 102, "distance": 500, "distance_unit": "m", "rpe": 7.0, "rest_time": 120, "notes": "1:42 pace"}),
    ("Full Body WOD", "Rowing", {"set_number": 2, "duration": 105, "distance": 500, "distance_unit": "m", "rpe": 8.0, "rest_time": 120, "notes": "1:45 pace"}),
    ("Full Body WOD", "Rowing", {"set_number": 3, "duration": 110, "distance": 500, "distance_unit": "m", "rpe": 9.0, "notes": "1:50 pace, gassed"}),
]


def seed(db: Session, user_id: str) -> dict[str, int]:
    """Insert the sample data for ``user_id`` in one transaction and return row counts."""
    try:
        exercises = {fields["name"]: Exercise(**fields, is_custom=0) for fields in EXERCISES}
        db.add_all(exercises.values())

        workouts = {fields["name"]: Workout(user_id=user_id, **fields) for fields in WORKOUTS}
        db.add_all(workouts.values())

        workout_exercises: dict[tuple[str, str], WorkoutExercise] = {}
        for workout_name, exercise_name, fields in WORKOUT_EXERCISES:
            workout_exercise = WorkoutExercise(
                workout=workouts[workout_name],
                exercise=exercises[exercise_name],
                **fields,
            )
            workout_exercises[(workout_name, exercise_name)] = workout_exercise
            db.add(workout_exercise)

        set_count = 0
        for workout_name, exercise_name, fields in SETS:
            db.add(
                WorkoutSet(
                    workout_exercise=workout_exercises[(workout_name, exercise_name)],
                    completed=1,
                    **fields,
                )
            )
            set_count += 1

        db.commit()
    except Exception:
        db.rollback()
        raise

    counts = {
        "exercises": len(exercises),
        "workouts": len(workouts),
        "workout_exercises": len(workout_exercises),
        "sets": set_count,
    }
    logger.info(
        "seed_complete user_id=%s exercises=%s workouts=%s workout_exercises=%s sets=%s",
        user_id,
        counts["exercises"],
        counts["workouts"],
        counts["workout_exercises"],
        counts["sets"],
    )
    return counts


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Seed the workout log database with sample data")
    parser.add_argument(
        "--user-id",
        default=os.getenv("SEED_USER_ID"),
        help="Owner of the seeded workouts (default: $SEED_USER_ID)",
    )
    args = parser.parse_args(argv)
    if not args.user_id:
        parser.error("--user-id is required when SEED_USER_ID is not set")

    logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())

    with SessionLocal() as db:
        seed(db, args.user_id)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
