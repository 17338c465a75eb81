from __future__ import annotations

from typing import Any, Dict

import pandas as pd

from artcore.aggregate import canonical_keys
from artcore.data import RECORD_COLUMNS, present_columns
from artcore.features import FEATURES


def compute_debug(records: pd.DataFrame) -> Dict[str, Any]:
    """Row counts and per-feature coverage for the data-quality view."""
    payload: Dict[str, Any] = {
        "row_counts": {
            "records": int(len(records)),
            "columns": int(len(records.columns)),
            "ragged_rows_repaired": int(records.attrs.get("ragged_rows", 0) or 0),
        },
        "columns_present": present_columns(records),
        "columns_missing": [c for c in RECORD_COLUMNS if c not in records.columns],
        "feature_coverage": [],
    }
    if records.empty:
        return payload

    for spec in FEATURES.values():
        keys = canonical_keys(records, spec.normalizer)
        counted = int(keys.notna().sum())
        payload["feature_coverage"].append(
            {
                "feature": spec.feature.value,
                "records_counted": counted,
                "records_excluded": int(len(records)) - counted,
                "distinct_values": int(keys.dropna().nunique()),
                "source_fields": [f for f in spec.source_fields if f in records.columns],
            }
        )
    return payload
