from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, Iterable

import altair as alt
import pandas as pd

alt.data_transformers.disable_max_rows()

COUNT_TITLE = "Number of Items"


def to_vega_spec(chart: alt.Chart) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()


def entries_frame(entries: Iterable[Any]) -> pd.DataFrame:
    rows = [e if isinstance(e, dict) else asdict(e) for e in entries]
    return pd.DataFrame(rows, columns=["label", "count"])


def _tooltip(label_title: str) -> list:
    return [alt.Tooltip("label:N", title=label_title), alt.Tooltip("count:Q", title=COUNT_TITLE, format=",")]


def bar_chart(df: pd.DataFrame, label_title: str = "Value") -> alt.Chart:
    # sort=None keeps the ranked order coming out of the aggregator
    return (
        alt.Chart(df)
        .mark_bar(cornerRadiusTopLeft=4, cornerRadiusTopRight=4)
        .encode(
            x=alt.X("label:N", title=None, sort=None, axis=alt.Axis(labelAngle=-45)),
            y=alt.Y("count:Q", title=COUNT_TITLE),
            tooltip=_tooltip(label_title),
        )
    )


def pie_chart(df: pd.DataFrame, label_title: str = "Value") -> alt.Chart:
    return (
        alt.Chart(df)
        .mark_arc()
        .encode(
            theta=alt.Theta("count:Q"),
            color=alt.Color("label:N", title=label_title, sort=None),
            order=alt.Order("count:Q", sort="descending"),
            tooltip=_tooltip(label_title),
        )
    )


def series_chart(df: pd.DataFrame, label_title: str = "Decade") -> alt.Chart:
    return (
        alt.Chart(df)
        .mark_bar()
        .encode(
            y=alt.Y("label:N", title=None, sort=None),
            x=alt.X("count:Q", title=COUNT_TITLE),
            tooltip=_tooltip(label_title),
        )
    )


def build_chart(entries: Iterable[Any], *, chart_kind: str, chart_type: str = "bar", label_title: str = "Value") -> alt.Chart:
    """Ordered series always render as horizontal bars; ranked data as bar or pie."""
    df = entries_frame(entries)
    if chart_kind == "ordered-series":
        return series_chart(df, label_title)
    if chart_type == "pie":
        return pie_chart(df, label_title)
    return bar_chart(df, label_title)
