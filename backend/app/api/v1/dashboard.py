from __future__ import annotations

from datetime import date as date_cls

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from app.api.deps import get_current_principal
from app.core.security import Principal
from app.core.timewindow import local_today
from app.db.session import get_db
from app.presentation.dashboard import DashboardFlow, DashboardQuery, ViewState
from app.schemas.dashboard import DashboardDayResponse, DashboardTimezoneRequiredResponse
from app.services.workouts import list_workouts_for_date

router = APIRouter(prefix="/v1/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardDayResponse | DashboardTimezoneRequiredResponse)
def dashboard_day(
    response: Response,
    dashboard_date: date_cls | None = Query(default=None, alias="date"),
    tz: str | None = Query(default=None),
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    response.headers["Cache-Control"] = "no-store"

    tz = tz or None
    query = DashboardQuery(date=dashboard_date or local_today(tz), tz=tz)

    flow = DashboardFlow(query)
    if flow.state is ViewState.NO_TIMEZONE_KNOWN:
        return DashboardTimezoneRequiredResponse(
            date=query.date,
            redirect_template=flow.redirect_template(),
        )

    workouts = list_workouts_for_date(db, principal, query.date, query.tz)
    return DashboardDayResponse(date=query.date, tz=query.tz, workouts=workouts)
