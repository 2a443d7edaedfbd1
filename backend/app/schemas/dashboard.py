from __future__ import annotations

from datetime import date as date_cls
from typing import Literal

from pydantic import BaseModel, Field

from app.presentation.dashboard import TIMEZONE_PLACEHOLDER
from app.schemas.workouts import WorkoutWithDetails


class DashboardTimezoneRequiredResponse(BaseModel):
    state: Literal["no_timezone_known"] = "no_timezone_known"
    date: date_cls
    redirect_template: str = Field(
        description="Dashboard URL with a {tz} placeholder; substitute the percent-encoded IANA zone name",
    )
    placeholder: str = TIMEZONE_PLACEHOLDER
    placeholder_encoding: Literal["percent"] = "percent"


class DashboardDayResponse(BaseModel):
    state: Literal["resolved"] = "resolved"
    date: date_cls
    tz: str
    workouts: list[WorkoutWithDetails] = Field(default_factory=list)
