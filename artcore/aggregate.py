from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Mapping, Optional, Union

import pandas as pd

from artcore.features import Feature, FeatureSpec, TOP_N, get_feature
from artcore.normalize import decade_from_label


Records = Union[pd.DataFrame, Iterable[Mapping[str, Any]]]


@dataclass(frozen=True)
class AggregationEntry:
    label: str
    count: int


def as_frame(records: Records) -> pd.DataFrame:
    if isinstance(records, pd.DataFrame):
        return records
    return pd.DataFrame(list(records))


def canonical_keys(records: Records, normalizer: Callable[[Mapping[str, Any]], Optional[str]]) -> pd.Series:
    """One key per record (None when excluded); reads rows, never writes them."""
    df = as_frame(records)
    if df.empty:
        return pd.Series(dtype=object)
    keys = [normalizer(row) for row in df.to_dict(orient="records")]
    return pd.Series(keys, index=df.index, dtype=object)


def count_keys(keys: pd.Series) -> pd.Series:
    """Occurrences per key, excluded keys dropped, first-seen order kept."""
    keys = keys.dropna()
    if keys.empty:
        return pd.Series(dtype="int64")
    return keys.groupby(keys, sort=False).size()


def rank_top_n(counts: pd.Series, top_n: int = TOP_N) -> pd.Series:
    # stable: equal counts keep first-seen order
    return counts.sort_values(ascending=False, kind="stable").head(top_n)


def order_by_decade(counts: pd.Series) -> pd.Series:
    return counts.sort_index(key=lambda idx: idx.map(decade_from_label), kind="stable")


def to_entries(counts: pd.Series) -> List[AggregationEntry]:
    return [AggregationEntry(label=str(label), count=int(n)) for label, n in counts.items()]


def aggregate(records: Records, feature: Union[str, Feature, FeatureSpec]) -> List[AggregationEntry]:
    """Count normalized values of ``feature`` and rank them for charting.

    Ranked features come back count-descending and truncated to the top 10;
    the decade series comes back in ascending decade order, untruncated.
    Never raises for missing columns or empty input; both yield ``[]``.
    """
    spec = feature if isinstance(feature, FeatureSpec) else get_feature(feature)
    counts = count_keys(canonical_keys(records, spec.normalizer))
    if counts.empty:
        return []
    ranked = rank_top_n(counts) if spec.is_ranked else order_by_decade(counts)
    return to_entries(ranked)
