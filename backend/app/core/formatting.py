"""Display helpers for workout durations and per-exercise set summaries.

Everything here is pure: no database access and no logging, so the same
functions back the API read schemas and the seed loader.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Protocol

DEFAULT_WEIGHT_UNIT = "lbs"


class SetLike(Protocol):
    reps: int | None
    weight: float | None
    weight_unit: str | None


def resolve_weight_unit(unit: str | None) -> str:
    """Return ``unit`` or the default weight unit when it is missing or blank."""
    if unit is None or not unit.strip():
        return DEFAULT_WEIGHT_UNIT
    return unit


def format_number(value: float | int) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_duration(seconds: int) -> str:
    seconds = int(seconds)
    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    remainder = seconds % 60

    if hours > 0:
        return f"{hours}h {minutes}m"
    if minutes > 0:
        return f"{minutes}m {remainder}s"
    return f"{remainder}s"


def sets_with_reps(sets: Iterable[SetLike]) -> list[SetLike]:
    # Independent of the per-set ``completed`` flag: a skipped set that still
    # recorded reps is counted, a completed duration-only set is not.
    return [s for s in sets if s.reps is not None]


def summarize_exercise_sets(sets: Sequence[SetLike]) -> str:
    if not sets:
        return ""

    counted = sets_with_reps(sets)
    if not counted:
        return f"{len(sets)} sets"

    total_reps = sum(s.reps or 0 for s in counted)
    max_weight = max((s.weight or 0) for s in counted)
    unit = resolve_weight_unit(counted[0].weight_unit)

    summary = f"{len(counted)} sets, {total_reps} reps"
    if max_weight > 0:
        summary += f" @ {format_number(max_weight)} {unit}"
    return summary
