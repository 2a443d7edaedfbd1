"""SQLAlchemy model package.

Import model modules here as they are added so Alembic autogenerate
can discover them via metadata.
"""

from app.db.models.exercise import Exercise  # noqa: F401
from app.db.models.workout import Workout  # noqa: F401
from app.db.models.workout_exercise import WorkoutExercise  # noqa: F401
from app.db.models.workout_set import WorkoutSet  # noqa: F401
