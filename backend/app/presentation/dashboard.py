"""Date + timezone resolution for the dashboard view.

The server never guesses a timezone for the day query. A first load that
carries only a date is answered with a redirect template; the client fills
in its own IANA zone and replaces the location. Once both parameters are
present, date changes keep the known zone.

    NO_TIMEZONE_KNOWN --timezone_discovered--> REDIRECTING --loaded--> RESOLVED
    RESOLVED --date_selected--> RESOLVED

The dashboard route builds its responses through ``DashboardFlow`` (initial
state, redirect template). ``timezone_discovered`` and ``date_selected``
model the browser's half of the flow and produce the exact URLs the SPA
should navigate to.

The value substituted for ``{tz}`` in a redirect template must be
percent-encoded (``encodeURIComponent`` in the browser). Zone names such as
``Etc/GMT+5`` otherwise lose their ``+`` to form decoding.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date as date_cls
import enum
from urllib.parse import quote, urlencode

from app.core.errors import InvalidTransition

DASHBOARD_PATH = "/dashboard"
TIMEZONE_PLACEHOLDER = "{tz}"


class ViewState(str, enum.Enum):
    NO_TIMEZONE_KNOWN = "no_timezone_known"
    REDIRECTING = "redirecting"
    RESOLVED = "resolved"


@dataclass(frozen=True)
class DashboardQuery:
    date: date_cls
    tz: str | None = None


def resolve_view_state(query: DashboardQuery) -> ViewState:
    if query.tz:
        return ViewState.RESOLVED
    return ViewState.NO_TIMEZONE_KNOWN


def timezone_redirect_url(current_date: date_cls, tz: str) -> str:
    """Replacement URL once the client knows its zone. Only date and tz survive."""
    return f"{DASHBOARD_PATH}?{urlencode({'date': current_date.isoformat(), 'tz': tz})}"


def timezone_redirect_template(current_date: date_cls) -> str:
    params = urlencode({"date": current_date.isoformat()})
    return f"{DASHBOARD_PATH}?{params}&tz={TIMEZONE_PLACEHOLDER}"


def fill_redirect_template(template: str, tz: str) -> str:
    """What the client does with a template: substitute the encoded zone."""
    return template.replace(TIMEZONE_PLACEHOLDER, quote(tz, safe=""))


def date_selection_url(params: Mapping[str, str], new_date: date_cls, tz: str) -> str:
    """Push URL for a picker selection. Unrelated query params are kept."""
    merged = dict(params)
    merged["date"] = new_date.isoformat()
    merged["tz"] = tz
    return f"{DASHBOARD_PATH}?{urlencode(merged)}"


class DashboardFlow:
    def __init__(self, query: DashboardQuery) -> None:
        self.query = query
        self.state = resolve_view_state(query)

    def redirect_template(self) -> str:
        if self.state is not ViewState.NO_TIMEZONE_KNOWN:
            raise InvalidTransition(f"redirect_template from {self.state.value}")
        return timezone_redirect_template(self.query.date)

    def timezone_discovered(self, tz: str) -> str:
        if self.state is not ViewState.NO_TIMEZONE_KNOWN:
            raise InvalidTransition(f"timezone_discovered from {self.state.value}")
        self.state = ViewState.REDIRECTING
        return timezone_redirect_url(self.query.date, tz)

    def loaded(self, query: DashboardQuery) -> ViewState:
        if resolve_view_state(query) is not ViewState.RESOLVED:
            raise InvalidTransition("loaded without a timezone")
        self.query = query
        self.state = ViewState.RESOLVED
        return self.state

    def date_selected(self, new_date: date_cls, params: Mapping[str, str] | None = None) -> str:
        tz = self.query.tz
        if self.state is not ViewState.RESOLVED or not tz:
            raise InvalidTransition(f"date_selected from {self.state.value}")
        url = date_selection_url(params or {}, new_date, tz)
        self.query = DashboardQuery(date=new_date, tz=tz)
        return url
