from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, Sequence

import pandas as pd

from artcore.aggregate import AggregationEntry, aggregate
from artcore.charts import build_chart, to_vega_spec
from artcore.features import FeatureSpec, get_feature
from artcore.filters import ChartFilters

NO_DATA_MESSAGE = "No data available for this feature"


def build_payload(
    spec: FeatureSpec,
    entries: Sequence[AggregationEntry],
    *,
    chart_type: str = "bar",
    include_spec: bool = False,
) -> Dict[str, Any]:
    # the decade series has one rendering; the bar/pie choice only applies to ranked data
    chart_type = chart_type if spec.is_ranked else "bar"
    payload: Dict[str, Any] = {
        "feature": spec.feature.value,
        "chart_kind": spec.chart_kind,
        "chart_type": chart_type,
        "title": spec.title,
        "entries": [asdict(e) for e in entries],
        "has_data": bool(entries),
        "message": None if entries else NO_DATA_MESSAGE,
    }
    if include_spec:
        payload["chart"] = (
            to_vega_spec(build_chart(entries, chart_kind=spec.chart_kind, chart_type=chart_type, label_title=spec.label))
            if entries
            else None
        )
    return payload


def compute_chart(filters: ChartFilters, records: pd.DataFrame, *, include_spec: bool = True) -> Dict[str, Any]:
    spec = get_feature(filters.feature)
    entries = aggregate(records, spec)
    return build_payload(spec, entries, chart_type=filters.chart_type, include_spec=include_spec)
