"""Reshape disease.sh historical timelines into chart-ready series."""

from dataclasses import dataclass, field
from typing import Dict, List, Mapping

import pandas as pd
import plotly.graph_objects as go

from covid_dashboard import config
from covid_dashboard.errors import ApiDecodeError


@dataclass(frozen=True)
class Dataset:
    label: str
    values: List[int]
    color: str
    fill_color: str


@dataclass(frozen=True)
class HistoricalSeries:
    """Date labels plus one or more value arrays aligned with them."""

    scope: str
    labels: List[str] = field(default_factory=list)
    datasets: List[Dataset] = field(default_factory=list)


def _timeline_for(raw: Mapping, scope: str) -> Dict[str, Mapping]:
    """Pick the metric mappings the chart needs for this scope."""
    if not isinstance(raw, Mapping):
        raise ApiDecodeError("historical response is not an object")

    if scope == config.WORLDWIDE:
        source, keys = raw, ("cases",)
    else:
        source, keys = raw.get("timeline"), tuple(k for _, k, _, _ in config.DATASET_STYLES)
        if not isinstance(source, Mapping):
            raise ApiDecodeError(f"historical response for {scope} has no timeline")

    metrics = {}
    for key in keys:
        mapping = source.get(key)
        if mapping is None:
            # deaths and recovered are optional; the dates come from cases
            if key == "cases":
                raise ApiDecodeError(f"historical response for {scope} has no cases")
            mapping = {}
        if not isinstance(mapping, Mapping):
            raise ApiDecodeError(f"timeline {key!r} is not a date mapping")
        metrics[key] = mapping
    return metrics


def _counts(key: str, mapping: Mapping) -> pd.Series:
    """Numeric counts for one metric; nulls are allowed, anything else non-numeric is not."""
    raw = pd.Series(mapping, dtype="object")
    counts = pd.to_numeric(raw, errors="coerce")
    bad = counts.isna() & raw.notna()
    if bad.any():
        raise ApiDecodeError(f"non-numeric {key} counts on {list(raw.index[bad])[:3]}")
    return counts.astype("float64")


def build_historical_series(raw: Mapping, scope: str) -> HistoricalSeries:
    """Turn a historical API payload into a HistoricalSeries.

    Worldwide payloads yield a single "Daily Cases" dataset; country payloads
    yield cases, deaths and recovered. Dates come from the cases mapping and
    are sorted chronologically; other metrics are aligned to them, with
    missing days filled with 0.

    Args:
        raw: Decoded JSON from ``/historical/all`` or ``/historical/{country}``
        scope: ``config.WORLDWIDE`` or a country name

    Returns:
        HistoricalSeries whose datasets all match ``labels`` in length.
    """
    metrics = _timeline_for(raw, scope)

    labels = list(metrics["cases"].keys())
    dates = pd.to_datetime(pd.Series(labels, dtype="object"), format=config.DATE_FORMAT, errors="coerce")
    if dates.isna().any():
        bad = [label for label, d in zip(labels, dates) if pd.isna(d)]
        raise ApiDecodeError(f"unparseable timeline dates: {bad[:3]}")

    frame = pd.DataFrame({key: _counts(key, mapping) for key, mapping in metrics.items()})
    frame = frame.reindex(labels).fillna(0)
    frame["_date"] = dates.values
    frame = frame.sort_values("_date", kind="mergesort")

    datasets = [
        Dataset(
            label=label,
            values=frame[key].astype("int64").tolist(),
            color=color,
            fill_color=fill,
        )
        for label, key, color, fill in config.DATASET_STYLES
        if key in metrics
    ]
    return HistoricalSeries(scope=scope, labels=frame.index.tolist(), datasets=datasets)


def build_figure(series: HistoricalSeries) -> go.Figure:
    """Line chart with one trace per dataset and the legend on top."""
    x = pd.to_datetime(pd.Index(series.labels), format=config.DATE_FORMAT)
    fig = go.Figure()
    for dataset in series.datasets:
        fig.add_trace(go.Scatter(
            x=x,
            y=dataset.values,
            mode="lines",
            name=dataset.label,
            line=dict(color=dataset.color),
            marker=dict(color=dataset.fill_color),
        ))
    fig.update_layout(
        title=config.CHART_TITLE,
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="left", x=0),
        xaxis=dict(type="date"),
    )
    return fig
