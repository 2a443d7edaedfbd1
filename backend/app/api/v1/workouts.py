from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Path, status
from sqlalchemy.orm import Session

from app.api.deps import get_current_principal
from app.core.security import Principal
from app.db.session import get_db
from app.schemas.workouts import (
    WorkoutCreateRequest,
    WorkoutMutationResponse,
    WorkoutRead,
)
from app.services.workouts import create_workout, get_workout_by_id, update_workout

router = APIRouter(prefix="/v1/workouts", tags=["workouts"])


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Workout not found")


def _parse_workout_id(raw: str) -> int:
    # int() alone also accepts underscores, surrounding whitespace and non-ASCII digits
    if not (raw.isascii() and raw.isdigit()):
        raise _not_found()
    return int(raw)


@router.post("", response_model=WorkoutMutationResponse, status_code=status.HTTP_201_CREATED)
def create_workout_action(
    payload: WorkoutCreateRequest,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    workout = create_workout(db, principal, name=payload.name, notes=payload.notes)
    return WorkoutMutationResponse(workout=workout)


@router.get("/{workout_id}", response_model=WorkoutRead)
def get_workout(
    workout_id: str = Path(...),
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    workout = get_workout_by_id(db, principal, _parse_workout_id(workout_id))
    if workout is None:
        raise _not_found()
    return workout


@router.put("/{workout_id}", response_model=WorkoutMutationResponse)
def update_workout_action(
    payload: WorkoutCreateRequest,
    workout_id: int = Path(...),
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    workout = update_workout(db, principal, workout_id, name=payload.name, notes=payload.notes)
    if workout is None:
        raise _not_found()
    return WorkoutMutationResponse(workout=workout)
