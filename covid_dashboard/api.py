"""Client for the disease.sh COVID-19 endpoints used by the dashboard."""

from urllib.parse import quote

import requests

from covid_dashboard import config
from covid_dashboard.errors import ApiDecodeError, ApiResponseError, ApiTransportError
from covid_dashboard.logging import get_logger

logger = get_logger(__name__)


class DiseaseShClient:
    """Thin wrapper over the five read-only endpoints.

    Every call goes to the network; nothing is cached here. Without an
    injected session each GET is a plain ``requests.get``, so the client can be
    used from several threads at once.
    """

    def __init__(self, base_url=None, timeout=None, session=None):
        self.base_url = (base_url or config.API_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else config.REQUEST_TIMEOUT_S
        self.session = session or requests

    def _url(self, path):
        return f"{self.base_url}{config.API_PREFIX}{path}"

    def _get_json(self, path, params=None):
        url = self._url(path)
        logger.info("GET %s", url)
        try:
            resp = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise ApiTransportError(f"Request to {url} failed: {e}", url=url) from e

        try:
            resp.raise_for_status()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else resp.status_code
            raise ApiResponseError(f"{url} returned HTTP {status}", url=url, status_code=status) from e
        try:
            return resp.json()
        except ValueError as e:
            raise ApiDecodeError(f"{url} did not return JSON: {e}", url=url) from e

    # Snapshots

    def fetch_all(self) -> dict:
        """Current worldwide totals."""
        return self._expect_dict(self._get_json("/all"), "/all")

    def fetch_countries(self) -> list:
        data = self._get_json("/countries")
        if not isinstance(data, list):
            raise ApiDecodeError("/countries did not return a list", url=self._url("/countries"))
        return data

    def fetch_country(self, country: str) -> dict:
        path = f"/countries/{quote(country, safe='')}"
        return self._expect_dict(self._get_json(path), path)

    def fetch_snapshot(self, scope: str) -> dict:
        if scope == config.WORLDWIDE:
            return self.fetch_all()
        return self.fetch_country(scope)

    # Historical

    def fetch_historical_all(self, lastdays=None) -> dict:
        """Worldwide timeline: ``{cases: {date: n}, deaths: {...}, recovered: {...}}``."""
        params = {"lastdays": lastdays or config.HISTORY_LAST_DAYS}
        return self._expect_dict(self._get_json("/historical/all", params=params), "/historical/all")

    def fetch_historical_country(self, country: str, lastdays=None) -> dict:
        """Country timeline: ``{country, timeline: {cases, deaths, recovered}}``."""
        path = f"/historical/{quote(country, safe='')}"
        params = {"lastdays": lastdays or config.HISTORY_LAST_DAYS}
        data = self._expect_dict(self._get_json(path, params=params), path)
        if not isinstance(data.get("timeline"), dict):
            raise ApiDecodeError(f"{path} response has no timeline", url=self._url(path))
        return data

    def _expect_dict(self, data, path):
        if not isinstance(data, dict):
            raise ApiDecodeError(f"{path} did not return an object", url=self._url(path))
        # disease.sh reports unknown countries as 200/404 with a message body
        if "message" in data and "cases" not in data and "timeline" not in data:
            raise ApiResponseError(data["message"], url=self._url(path))
        return data
