"""Dashboard state and the pure transitions applied to it.

Every transition returns a new ``DashboardState``; nothing is mutated in place.
Scope-bound results carry the ``Request`` they answer, and results for a
request issued before the latest selection change are dropped.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple

from covid_dashboard import config
from covid_dashboard.series import HistoricalSeries


class ChartStatus(Enum):
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    POPULATED = "populated"
    ERROR = "error"


@dataclass(frozen=True)
class Request:
    """Tag for an in-flight scope-bound fetch."""

    scope: str
    generation: int


@dataclass(frozen=True)
class DashboardState:
    countries: Tuple[str, ...] = ()
    selection: str = config.WORLDWIDE
    snapshot: Optional[dict] = None
    series: Optional[HistoricalSeries] = None
    chart_status: ChartStatus = ChartStatus.UNINITIALIZED
    chart_error: Optional[str] = None
    snapshot_error: Optional[str] = None
    generation: int = 0


def scope_label(scope: str) -> str:
    return config.WORLDWIDE_LABEL if scope == config.WORLDWIDE else scope


def issue_request(state: DashboardState, scope: Optional[str] = None) -> Request:
    return Request(scope=scope if scope is not None else state.selection, generation=state.generation)


def is_stale(state: DashboardState, request: Request) -> bool:
    return request.generation != state.generation or request.scope != state.selection


def selection_changed(state: DashboardState, scope: str) -> DashboardState:
    """Switch scope; anything still in flight for the old scope becomes stale."""
    return replace(
        state,
        selection=scope,
        generation=state.generation + 1,
        chart_status=ChartStatus.LOADING,
        chart_error=None,
    )


def countries_loaded(state: DashboardState, countries) -> DashboardState:
    names = tuple(c["country"] for c in countries if isinstance(c, dict) and c.get("country"))
    return replace(state, countries=names)


def snapshot_loaded(state: DashboardState, request: Request, snapshot: dict) -> DashboardState:
    if is_stale(state, request):
        return state
    return replace(state, snapshot=dict(snapshot), snapshot_error=None)


def snapshot_failed(state: DashboardState, request: Request, error: Exception) -> DashboardState:
    # Previous snapshot stays on screen.
    if is_stale(state, request):
        return state
    return replace(state, snapshot_error=str(error))


def series_requested(state: DashboardState, request: Request) -> DashboardState:
    if is_stale(state, request):
        return state
    return replace(
        state,
        chart_status=ChartStatus.LOADING,
        chart_error=None,
    )


def series_loaded(state: DashboardState, request: Request, series: HistoricalSeries) -> DashboardState:
    if is_stale(state, request):
        return state
    return replace(state, series=series, chart_status=ChartStatus.POPULATED, chart_error=None)


def series_failed(state: DashboardState, request: Request, error: Exception) -> DashboardState:
    # Last good series stays in state; the page redraws it if the scope still matches.
    if is_stale(state, request):
        return state
    return replace(state, chart_status=ChartStatus.ERROR, chart_error=str(error))
