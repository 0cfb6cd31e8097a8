"""Streamlit page: title with country dropdown, summary cards and the daily chart."""

import streamlit as st

from covid_dashboard import config
from covid_dashboard.api import DiseaseShClient
from covid_dashboard.logging import get_logger
from covid_dashboard.series import build_figure
from covid_dashboard.state import ChartStatus, DashboardState, scope_label
from covid_dashboard.viewmodel import DashboardViewModel

logger = get_logger(__name__)

VIEW_MODEL_KEY = "view_model"
SELECTION_KEY = "selection"

CARD_METRICS = (("Cases", "cases"), ("Deaths", "deaths"), ("Recovered", "recovered"))


def format_count(value) -> str:
    if value is None:
        return "N/A"
    try:
        return f"{int(value):,}"
    except (TypeError, ValueError):
        return "N/A"


def card_specs(state: DashboardState):
    """(label, formatted value) for each summary card."""
    label = scope_label(state.selection)
    snapshot = state.snapshot or {}
    return [(f"{title} for {label}", format_count(snapshot.get(key))) for title, key in CARD_METRICS]


def describe_chart(state: DashboardState):
    """Decide what the chart area shows as (kind, message, figure).

    kind is "chart", "error" or "info". On error the last good chart is still
    returned when it belongs to the current selection.
    """
    if state.chart_status is ChartStatus.POPULATED and state.series is not None:
        return "chart", None, build_figure(state.series)
    if state.chart_status is ChartStatus.ERROR:
        detail = f": {state.chart_error}" if state.chart_error else ""
        fig = None
        if state.series is not None and state.series.scope == state.selection:
            fig = build_figure(state.series)
        return "error", f"{config.ERROR_MESSAGE}{detail}", fig
    return "info", config.NO_DATA_MESSAGE, None


def get_view_model() -> DashboardViewModel:
    if VIEW_MODEL_KEY not in st.session_state:
        st.session_state[VIEW_MODEL_KEY] = DashboardViewModel(DiseaseShClient())
    return st.session_state[VIEW_MODEL_KEY]


def _on_selection_change():
    scope = st.session_state[SELECTION_KEY]
    with st.spinner(f"Loading data for {scope_label(scope)}..."):
        get_view_model().set_selection(scope)


def render_header(state: DashboardState):
    col_title, col_select = st.columns([3, 1])
    col_title.title(f"Covid-19 Dashboard for {scope_label(state.selection)}")

    options = [config.WORLDWIDE] + [c for c in state.countries if c != config.WORLDWIDE]
    if state.selection not in options:
        options.append(state.selection)
    if SELECTION_KEY not in st.session_state:
        st.session_state[SELECTION_KEY] = state.selection
    col_select.selectbox(
        "Select a Country",
        options,
        format_func=scope_label,
        key=SELECTION_KEY,
        on_change=_on_selection_change,
    )


def render_cards(state: DashboardState):
    columns = st.columns(len(CARD_METRICS))
    for col, (label, value) in zip(columns, card_specs(state)):
        col.metric(label, value)
    if state.snapshot_error:
        st.caption(f"Totals could not be refreshed and may be out of date ({state.snapshot_error}).")


def render_chart(state: DashboardState):
    kind, message, fig = describe_chart(state)
    if kind == "error":
        st.error(message)
    elif kind == "info":
        st.info(message)
    if fig is not None:
        st.plotly_chart(fig)


def main():
    st.set_page_config(page_title="COVID-19 Dashboard", layout="wide")

    vm = get_view_model()
    with st.spinner("Loading COVID-19 data..."):
        state = vm.mount()

    render_header(state)
    st.markdown("---")
    render_cards(state)
    st.markdown("---")
    render_chart(state)

    st.caption("Data source: disease.sh (aggregated Johns Hopkins / Worldometers and other public sources).")
