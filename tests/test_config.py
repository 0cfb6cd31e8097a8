"""Tests for environment overrides of configuration constants."""

import importlib

import pytest

from covid_dashboard import config
from covid_dashboard.errors import ConfigError


@pytest.fixture
def reload_config(monkeypatch):
    yield lambda: importlib.reload(config)
    for name in ("API_URL", "TIMEOUT", "LAST_DAYS"):
        monkeypatch.delenv(config.ENV_PREFIX + name, raising=False)
    importlib.reload(config)


def test_defaults():
    assert config.API_BASE_URL == "https://disease.sh"
    assert config.WORLDWIDE == "worldwide"
    assert config.HISTORY_LAST_DAYS == "all"


def test_env_overrides(monkeypatch, reload_config):
    monkeypatch.setenv("COVID_DASHBOARD_API_URL", "http://localhost:3000/")
    monkeypatch.setenv("COVID_DASHBOARD_TIMEOUT", "2.5")
    monkeypatch.setenv("COVID_DASHBOARD_LAST_DAYS", "90")

    cfg = reload_config()

    assert cfg.API_BASE_URL == "http://localhost:3000"
    assert cfg.REQUEST_TIMEOUT_S == 2.5
    assert cfg.HISTORY_LAST_DAYS == "90"


@pytest.mark.parametrize("name,value", [
    ("COVID_DASHBOARD_TIMEOUT", "soon"),
    ("COVID_DASHBOARD_TIMEOUT", "0"),
    ("COVID_DASHBOARD_LAST_DAYS", "-3"),
])
def test_invalid_override_raises(monkeypatch, reload_config, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ConfigError):
        reload_config()
