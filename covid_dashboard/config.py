"""Single-source configuration constants for the dashboard.

Values marked with an environment variable can be overridden at import time.
"""

import os

from covid_dashboard.errors import ConfigError

ENV_PREFIX = "COVID_DASHBOARD_"


def _env(name: str, default: str) -> str:
    return os.environ.get(ENV_PREFIX + name, default)


def _env_float(name: str, default: float) -> float:
    raw = _env(name, str(default))
    try:
        value = float(raw)
    except ValueError:
        raise ConfigError(f"{ENV_PREFIX}{name} must be a number, got {raw!r}")
    if value <= 0:
        raise ConfigError(f"{ENV_PREFIX}{name} must be positive, got {raw!r}")
    return value


def _env_last_days(name: str, default: str) -> str:
    raw = _env(name, default).strip().lower()
    if raw != "all" and not (raw.isdigit() and int(raw) > 0):
        raise ConfigError(f"{ENV_PREFIX}{name} must be 'all' or a positive integer, got {raw!r}")
    return raw


# ------ Remote API -------
API_BASE_URL: str = _env("API_URL", "https://disease.sh").rstrip("/")
API_PREFIX: str = "/v3/covid-19"
REQUEST_TIMEOUT_S: float = _env_float("TIMEOUT", 30)
HISTORY_LAST_DAYS: str = _env_last_days("LAST_DAYS", "all")

# ------ Scope -------
WORLDWIDE: str = "worldwide"         # selection sentinel
WORLDWIDE_LABEL: str = "Worldwide"

# ------ Historical series -------
DATE_FORMAT: str = "%m/%d/%y"        # disease.sh timeline keys, e.g. "1/22/20"
CHART_TITLE: str = "Covid-19 Daily Cases"
NO_DATA_MESSAGE: str = "No data yet"
ERROR_MESSAGE: str = "Error in Data"

# (label, source key, border colour, fill colour)
DATASET_STYLES = (
    ("Daily Cases", "cases", "rgb(255, 99, 132)", "rgba(255, 99, 132, 0.5)"),
    ("Daily Deaths", "deaths", "rgb(255, 199, 132)", "rgba(205, 99, 132, 0.5)"),
    ("Daily Recovered", "recovered", "rgb(25, 199, 142)", "rgba(124, 59, 52, 0.5)"),
)

# ------ Logging -------
LOG_LEVEL: str = _env("LOG_LEVEL", "INFO")
LOG_FILE = os.environ.get(ENV_PREFIX + "LOG_FILE") or None
