from __future__ import annotations

from datetime import date, datetime, timezone

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError

from app.core.errors import InvalidTimezone, Unauthorized, ValidationError
from app.db.models.exercise import Exercise
from app.db.models.workout import Workout
from app.db.models.workout_exercise import WorkoutExercise
from app.db.models.workout_set import WorkoutSet
from app.services.workouts import (
    create_workout,
    get_workout_by_id,
    list_workouts_for_date,
    order_sets,
    order_workout_exercises,
    order_workouts,
    update_workout,
)
from tests.base import BackendTestBase


class ListWorkoutsForDateTests(BackendTestBase):
    def test_empty_day_returns_empty_list(self):
        self._info("No workouts on the day yields [] rather than None or an error.")
        result = list_workouts_for_date(self.db, self._principal(), date(2099, 1, 1), "UTC")
        self.assertEqual(result, [])
        self._pass("[]", result)

    def test_workouts_ordered_most_recent_first(self):
        self._add_workout("2026-01-27T08:00:00", name="Morning")
        self._add_workout("2026-01-27T19:00:00", name="Evening")
        self._add_workout("2026-01-27T12:30:00", name="Lunch")

        result = list_workouts_for_date(self.db, self._principal(), date(2026, 1, 27), "UTC")
        names = [w.name for w in result]
        self.assertEqual(names, ["Evening", "Lunch", "Morning"])
        self._pass("Evening, Lunch, Morning", names)

    def test_nested_exercises_and_sets_are_ordered(self):
        workout = self._add_workout("2026-01-27T08:00:00", name="Leg Day")
        squat = self._add_exercise("Back Squat")
        jumps = self._add_exercise("Box Jumps")
        second = self._add_workout_exercise(workout, jumps, order_index=2)
        first = self._add_workout_exercise(workout, squat, order_index=1, target_weight=225)
        self._add_set(first, 3, reps=5, weight=225)
        self._add_set(first, 1, reps=5, weight=185)
        self._add_set(first, 2, reps=5, weight=205)
        self._add_set(second, 2, reps=10)
        self._add_set(second, 1, reps=10)

        [result] = list_workouts_for_date(self.db, self._principal(), date(2026, 1, 27), "UTC")
        self.assertEqual([we.order_index for we in result.workout_exercises], [1, 2])
        self.assertEqual(result.workout_exercises[0].exercise.name, "Back Squat")
        self.assertEqual([s.set_number for s in result.workout_exercises[0].sets], [1, 2, 3])
        self.assertEqual([s.set_number for s in result.workout_exercises[1].sets], [1, 2])
        self.assertEqual(result.workout_exercises[0].summary, "3 sets, 15 reps @ 225 lbs")
        self.assertEqual(result.workout_exercises[1].summary, "2 sets, 20 reps")

    def test_workout_without_exercises_has_empty_list(self):
        self._add_workout("2026-01-27T08:00:00", name="Empty")
        [result] = list_workouts_for_date(self.db, self._principal(), date(2026, 1, 27), "UTC")
        self.assertEqual(result.workout_exercises, [])

    def test_day_bucketing_follows_client_timezone(self):
        # 03:00Z on Jan 28 is still the evening of Jan 27 in Los Angeles.
        self._add_workout("2026-01-28T03:00:00", name="Late session")

        la_27 = list_workouts_for_date(self.db, self._principal(), date(2026, 1, 27), "America/Los_Angeles")
        la_28 = list_workouts_for_date(self.db, self._principal(), date(2026, 1, 28), "America/Los_Angeles")
        utc_28 = list_workouts_for_date(self.db, self._principal(), date(2026, 1, 28), "UTC")

        self.assertEqual([w.name for w in la_27], ["Late session"])
        self.assertEqual(la_28, [])
        self.assertEqual([w.name for w in utc_28], ["Late session"])

    def test_only_the_callers_workouts_are_listed(self):
        self._add_workout("2026-01-27T08:00:00", name="Mine")
        self._add_workout("2026-01-27T09:00:00", name="Theirs", user_id=self.other_user_id)

        result = list_workouts_for_date(self.db, self._principal(), date(2026, 1, 27), "UTC")
        self.assertEqual([w.name for w in result], ["Mine"])

    def test_invalid_timezone_is_rejected(self):
        with self.assertRaises(InvalidTimezone):
            list_workouts_for_date(self.db, self._principal(), date(2026, 1, 27), "Not/A_Real_TZ")


class GetWorkoutTests(BackendTestBase):
    def test_get_own_workout(self):
        workout = self._add_workout("2026-01-27T08:00:00", name="Leg Day", notes="Depth", duration=4500)
        result = get_workout_by_id(self.db, self._principal(), workout.id)
        self.assertIsNotNone(result)
        self.assertEqual(result.name, "Leg Day")
        self.assertEqual(result.notes, "Depth")
        self.assertEqual(result.duration_display, "1h 15m")

    def test_other_users_workout_is_absent(self):
        workout = self._add_workout("2026-01-27T08:00:00", user_id=self.other_user_id)
        self.assertIsNone(get_workout_by_id(self.db, self._principal(), workout.id))

    def test_missing_workout_is_absent(self):
        self.assertIsNone(get_workout_by_id(self.db, self._principal(), 987654))


class CreateWorkoutTests(BackendTestBase):
    def test_create_defaults_started_at_to_now(self):
        before = datetime.now(timezone.utc).replace(tzinfo=None, microsecond=0)
        result = create_workout(self.db, self._principal(), name="Morning Session", notes="Felt good")
        self.assertEqual(result.name, "Morning Session")
        self.assertEqual(result.notes, "Felt good")
        self.assertIsNone(result.completed_at)
        self.assertGreaterEqual(result.started_at.replace(tzinfo=None), before)

        stored = self.db.get(Workout, result.id)
        self.assertEqual(stored.user_id, self.user_id)

    def test_name_length_violations_insert_nothing(self):
        for name in ("", "x" * 201):
            with self.subTest(length=len(name)):
                with self.assertRaises(ValidationError):
                    create_workout(self.db, self._principal(), name=name)
                self.assertEqual(self._count(Workout), 0)

    def test_notes_too_long(self):
        with self.assertRaises(ValidationError) as ctx:
            create_workout(self.db, self._principal(), name="ok", notes="n" * 1001)
        self.assertEqual(ctx.exception.errors[0]["loc"], ("notes",))
        self.assertEqual(self._count(Workout), 0)

    def test_boundary_lengths_accepted(self):
        create_workout(self.db, self._principal(), name="x", notes="n" * 1000)
        create_workout(self.db, self._principal(), name="x" * 200)
        self.assertEqual(self._count(Workout), 2)

    def test_each_submission_creates_a_row(self):
        create_workout(self.db, self._principal(), name="Same")
        create_workout(self.db, self._principal(), name="Same")
        self.assertEqual(self._count(Workout), 2)


class UpdateWorkoutTests(BackendTestBase):
    def test_update_own_workout(self):
        workout = self._add_workout("2026-01-27T08:00:00", name="Old", notes="old notes")
        result = update_workout(self.db, self._principal(), workout.id, name="New", notes="new notes")
        self.assertEqual(result.name, "New")
        self.assertEqual(result.notes, "new notes")

        again = get_workout_by_id(self.db, self._principal(), workout.id)
        self.assertEqual(again.name, "New")

    def test_update_other_users_workout_is_not_found_and_unchanged(self):
        self._info("Cross-user update affects zero rows and reports not found.")
        workout = self._add_workout("2026-01-27T08:00:00", name="Original", notes="keep", user_id=self.other_user_id)

        result = update_workout(self.db, self._principal(), workout.id, name="Hijacked", notes="gone")
        self.assertIsNone(result)

        owner_view = get_workout_by_id(self.db, self._principal(self.other_user_id), workout.id)
        self.assertEqual(owner_view.name, "Original")
        self.assertEqual(owner_view.notes, "keep")
        self._pass("None + owner still sees Original/keep", {"name": owner_view.name, "notes": owner_view.notes})

    def test_omitted_notes_are_left_alone(self):
        workout = self._add_workout("2026-01-27T08:00:00", name="Old", notes="keep me")
        result = update_workout(self.db, self._principal(), workout.id, name="Renamed")
        self.assertEqual(result.notes, "keep me")

    def test_empty_notes_clear(self):
        workout = self._add_workout("2026-01-27T08:00:00", name="Old", notes="drop me")
        result = update_workout(self.db, self._principal(), workout.id, name="Renamed", notes="")
        self.assertIsNone(result.notes)

    def test_update_validation(self):
        workout = self._add_workout("2026-01-27T08:00:00", name="Old")
        with self.assertRaises(ValidationError):
            update_workout(self.db, self._principal(), workout.id, name="")
        with self.assertRaises(ValidationError):
            update_workout(self.db, self._principal(), 0, name="Fine")
        with self.assertRaises(ValidationError):
            update_workout(self.db, self._principal(), -3, name="Fine")
        self.assertEqual(get_workout_by_id(self.db, self._principal(), workout.id).name, "Old")


class UnauthorizedTests(BackendTestBase):
    def test_every_operation_requires_a_principal(self):
        workout = self._add_workout("2026-01-27T08:00:00", name="Old")
        calls = {
            "list": lambda: list_workouts_for_date(self.db, None, date(2026, 1, 27), "UTC"),
            "get": lambda: get_workout_by_id(self.db, None, workout.id),
            "create": lambda: create_workout(self.db, None, name="x"),
            "update": lambda: update_workout(self.db, None, workout.id, name="x"),
        }
        for label, call in calls.items():
            with self.subTest(operation=label):
                with self.assertRaises(Unauthorized):
                    call()
        self.assertEqual(self._count(Workout), 1)

    def test_principal_checked_before_validation_and_timezone(self):
        with self.assertRaises(Unauthorized):
            create_workout(self.db, None, name="")
        with self.assertRaises(Unauthorized):
            list_workouts_for_date(self.db, None, date(2026, 1, 27), "Not/A_Real_TZ")


class EntityRuleTests(BackendTestBase):
    def test_deleting_workout_cascades(self):
        workout = self._add_workout("2026-01-27T08:00:00")
        exercise = self._add_exercise()
        workout_exercise = self._add_workout_exercise(workout, exercise, order_index=1)
        self._add_set(workout_exercise, 1, reps=5)
        self._add_set(workout_exercise, 2, reps=5)

        self.db.delete(workout)
        self.db.commit()

        self.assertEqual(self._count(WorkoutExercise), 0)
        self.assertEqual(self._count(WorkoutSet), 0)
        self.assertEqual(self._count(Exercise), 1)

    def test_referenced_exercise_cannot_be_deleted(self):
        workout = self._add_workout("2026-01-27T08:00:00")
        exercise = self._add_exercise()
        self._add_workout_exercise(workout, exercise, order_index=1)

        with self.assertRaises(IntegrityError):
            self.db.execute(delete(Exercise).where(Exercise.id == exercise.id))
            self.db.commit()
        self.db.rollback()
        self.assertEqual(self._count(Exercise), 1)

    def test_completed_before_start_is_rejected(self):
        with self.assertRaises(IntegrityError):
            self._add_workout("2026-01-27T08:00:00", completed_at=datetime(2026, 1, 27, 7, 0, tzinfo=timezone.utc))
        self.db.rollback()

    def test_rpe_and_rir_ranges(self):
        workout = self._add_workout("2026-01-27T08:00:00")
        exercise = self._add_exercise()
        workout_exercise = self._add_workout_exercise(workout, exercise, order_index=1)
        self._add_set(workout_exercise, 1, reps=5, rpe=8.5, rir=10)

        for fields in ({"rpe": 8.3}, {"rpe": 0.5}, {"rir": 11}):
            with self.subTest(fields=fields):
                with self.assertRaises(IntegrityError):
                    self._add_set(workout_exercise, 2, reps=5, **fields)
                self.db.rollback()

    def test_weight_unit_defaults_on_insert(self):
        workout = self._add_workout("2026-01-27T08:00:00")
        exercise = self._add_exercise()
        workout_exercise = self._add_workout_exercise(workout, exercise, order_index=1)
        workout_set = self._add_set(workout_exercise, 1, reps=5, weight=100)
        self.assertEqual(workout_set.weight_unit, "lbs")
        self.assertEqual(workout_exercise.target_weight_unit, "lbs")
        self.assertEqual(workout_set.completed, 1)

        self.assertEqual(self._add_set(workout_exercise, 2, reps=5, weight_unit="  ").weight_unit, "lbs")
        self.assertEqual(self._add_set(workout_exercise, 3, reps=5, weight_unit=None).weight_unit, "lbs")
        self.assertEqual(self._add_set(workout_exercise, 4, reps=5, weight_unit="kg").weight_unit, "kg")


class SortKeyTests(BackendTestBase):
    def test_sort_helpers(self):
        workouts = [
            Workout(id=1, started_at=datetime(2026, 1, 27, 8)),
            Workout(id=2, started_at=datetime(2026, 1, 27, 18)),
            Workout(id=3, started_at=datetime(2026, 1, 27, 12)),
        ]
        self.assertEqual([w.id for w in order_workouts(workouts)], [2, 3, 1])

        workout_exercises = [WorkoutExercise(id=10, order_index=2), WorkoutExercise(id=11, order_index=1)]
        self.assertEqual([we.id for we in order_workout_exercises(workout_exercises)], [11, 10])

        sets = [WorkoutSet(id=5, set_number=3), WorkoutSet(id=6, set_number=1), WorkoutSet(id=7, set_number=2)]
        self.assertEqual([s.set_number for s in order_sets(sets)], [1, 2, 3])
