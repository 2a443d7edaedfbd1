import os

# Must be set before app.db.session builds its engine.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "workoutlog-test-secret")
