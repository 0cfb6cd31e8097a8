"""Exceptions raised by the dashboard."""


class DashboardError(Exception):
    """Base class for dashboard errors."""


class ConfigError(DashboardError):
    """Invalid configuration value."""


class ApiError(DashboardError):
    """A disease.sh request failed."""

    def __init__(self, message, url=None):
        super().__init__(message)
        self.url = url


class ApiTransportError(ApiError):
    """Connection failure or timeout."""


class ApiResponseError(ApiError):
    def __init__(self, message, url=None, status_code=None):
        super().__init__(message, url=url)
        self.status_code = status_code


class ApiDecodeError(ApiError):
    """Response body was not JSON or had an unexpected shape."""
