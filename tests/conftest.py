"""Test configuration and shared fixtures."""

from urllib.parse import urlparse

import pytest
import requests

from covid_dashboard import config
from covid_dashboard.api import DiseaseShClient
from covid_dashboard.viewmodel import DashboardViewModel

WORLD_SNAPSHOT = {"cases": 678801612, "deaths": 6791786, "recovered": 651560209, "active": 20449617}
FRANCE_SNAPSHOT = {"country": "France", "cases": 40138560, "deaths": 167985, "recovered": 39970575}
SPAIN_SNAPSHOT = {"country": "Spain", "cases": 13980340, "deaths": 121852, "recovered": 13762417}

COUNTRIES = [
    {"country": "France", "cases": 40138560},
    {"country": "Spain", "cases": 13980340},
    {"country": "United Kingdom", "cases": 24658705},
]

WORLD_HISTORY = {
    "cases": {"3/7/23": 676570149, "3/8/23": 676609955, "3/9/23": 676609955},
    "deaths": {"3/7/23": 6881802, "3/8/23": 6881955, "3/9/23": 6881955},
    "recovered": {"3/7/23": 0, "3/8/23": 0, "3/9/23": 0},
}


def country_history(name, base=100):
    return {
        "country": name,
        "province": ["mainland"],
        "timeline": {
            "cases": {"1/22/20": base, "1/23/20": base + 10, "1/24/20": base + 25},
            "deaths": {"1/22/20": 1, "1/23/20": 2, "1/24/20": 4},
            "recovered": {"1/22/20": 0, "1/23/20": 5, "1/24/20": 9},
        },
    }


class FakeResponse:
    def __init__(self, status_code=200, payload=None, bad_json=False):
        self.status_code = status_code
        self._payload = payload
        self._bad_json = bad_json

    def raise_for_status(self):
        if not 200 <= self.status_code < 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)

    def json(self):
        if self._bad_json:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._payload


class RoutingSession:
    """Stands in for ``requests.Session``; answers GETs from a path -> payload table.

    A route may be a payload, a FakeResponse, an exception to raise, or a
    callable producing one of those.
    """

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append((url, params, timeout))
        path = urlparse(url).path[len(config.API_PREFIX):]
        if path not in self.routes:
            return FakeResponse(404, {"message": "Country not found or doesn't have any cases"})
        route = self.routes[path]
        if callable(route):
            route = route()
        if isinstance(route, Exception):
            raise route
        if isinstance(route, FakeResponse):
            return route
        return FakeResponse(200, route)

    def paths(self):
        return [urlparse(url).path[len(config.API_PREFIX):] for url, _, _ in self.calls]


@pytest.fixture
def routes():
    return {
        "/all": WORLD_SNAPSHOT,
        "/countries": COUNTRIES,
        "/countries/France": FRANCE_SNAPSHOT,
        "/countries/Spain": SPAIN_SNAPSHOT,
        "/historical/all": WORLD_HISTORY,
        "/historical/France": country_history("France"),
        "/historical/Spain": country_history("Spain", base=500),
    }


@pytest.fixture
def session(routes):
    return RoutingSession(routes)


@pytest.fixture
def client(session):
    return DiseaseShClient(base_url="https://disease.test", timeout=5, session=session)


@pytest.fixture
def view_model(client):
    return DashboardViewModel(client)
