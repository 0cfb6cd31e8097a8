"""Dashboard view-model: owns the state and runs the fetches that feed it."""

import threading
from concurrent.futures import ThreadPoolExecutor

from covid_dashboard import config
from covid_dashboard import state as transitions
from covid_dashboard.api import DiseaseShClient
from covid_dashboard.errors import ApiError
from covid_dashboard.logging import get_logger
from covid_dashboard.series import build_historical_series

logger = get_logger(__name__)


class DashboardViewModel:
    """Holds a ``DashboardState`` and applies transitions as fetches complete.

    Writes are serialized by a lock so the two concurrent loads of a refresh
    can both report back. Results for an outdated selection are discarded.
    """

    def __init__(self, client=None, initial_state=None):
        self.client = client or DiseaseShClient()
        self._state = initial_state or transitions.DashboardState()
        self._lock = threading.Lock()
        self._countries_requested = False
        self._mounted = False

    @property
    def state(self) -> transitions.DashboardState:
        return self._state

    def _dispatch(self, transition, *args):
        with self._lock:
            self._state = transition(self._state, *args)
            return self._state

    def _issue(self):
        with self._lock:
            return transitions.issue_request(self._state)

    def _deliver(self, transition, request, payload):
        """Apply a scope-bound result unless a newer selection superseded it."""
        with self._lock:
            if transitions.is_stale(self._state, request):
                logger.debug(
                    "Dropping stale %s for %r (generation %d, current %d)",
                    transition.__name__, request.scope, request.generation, self._state.generation,
                )
                return False
            self._state = transition(self._state, request, payload)
            return True

    # Lifecycle

    def mount(self):
        """Initial load. Safe to call on every rerun; only the first call fetches."""
        if self._mounted:
            return self._state
        self._mounted = True
        self.load_country_list()
        self.refresh()
        return self._state

    def refresh(self):
        """Reload snapshot and chart for the current selection concurrently."""
        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="dashboard-fetch") as pool:
            futures = [
                pool.submit(self.load_snapshot),
                pool.submit(self.load_historical_series),
            ]
            for future in futures:
                future.result()
        return self._state

    def set_selection(self, scope):
        scope = scope or config.WORLDWIDE
        logger.info("Selection changed to %r", scope)
        self._dispatch(transitions.selection_changed, scope)
        return self.refresh()

    # Loads

    def load_country_list(self):
        """Fetch the dropdown entries once; a failure leaves the list empty."""
        if self._countries_requested:
            return self._state
        self._countries_requested = True
        try:
            countries = self.client.fetch_countries()
        except ApiError as e:
            logger.warning("Could not load country list: %s", e)
            return self._state
        state = self._dispatch(transitions.countries_loaded, countries)
        logger.info("Loaded %d countries", len(state.countries))
        return state

    def load_snapshot(self):
        """Totals for the current selection; on failure the previous totals stay."""
        request = self._issue()
        try:
            snapshot = self.client.fetch_snapshot(request.scope)
        except ApiError as e:
            logger.warning("Snapshot for %r failed, keeping previous totals: %s", request.scope, e)
            self._deliver(transitions.snapshot_failed, request, e)
            return self._state
        self._deliver(transitions.snapshot_loaded, request, snapshot)
        return self._state

    def load_historical_series(self):
        """Chart series for the current selection. Switch scope with ``set_selection``."""
        request = self._issue()
        self._dispatch(transitions.series_requested, request)
        try:
            if request.scope == config.WORLDWIDE:
                raw = self.client.fetch_historical_all()
            else:
                raw = self.client.fetch_historical_country(request.scope)
            series = build_historical_series(raw, request.scope)
        except ApiError as e:
            logger.error("Historical data for %r failed: %s", request.scope, e)
            self._deliver(transitions.series_failed, request, e)
            return self._state
        self._deliver(transitions.series_loaded, request, series)
        return self._state
