"""COVID-19 dashboard backed by the disease.sh API."""

__version__ = "0.1.0"
