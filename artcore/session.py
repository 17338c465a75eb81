"""Session state for one dashboard viewer.

The controller owns a single immutable ``DashboardState`` and replaces it on
every transition: one load at startup, then a full recompute from the stored
records whenever the feature changes. A feature chosen while the load is
still outstanding is remembered and applied once records arrive.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, Optional, Tuple

import pandas as pd

from artcore.aggregate import AggregationEntry, aggregate
from artcore.data import load_collection
from artcore.errors import CollectionLoadError
from artcore.features import DEFAULT_FEATURE, Feature, get_feature
from artcore.filters import CHART_TYPES, ChartFilters, ChartType
from artcore.metrics_chart import build_payload


logger = logging.getLogger(__name__)

Loader = Callable[[Optional[str]], pd.DataFrame]


@dataclass(frozen=True)
class DashboardState:
    records: Optional[pd.DataFrame] = field(default=None, compare=False, repr=False)
    feature: Feature = DEFAULT_FEATURE
    chart_type: ChartType = "bar"
    entries: Tuple[AggregationEntry, ...] = ()
    loading: bool = True
    error: Optional[str] = None
    error_type: Optional[str] = None

    @property
    def ready(self) -> bool:
        return not self.loading and self.error is None and self.records is not None

    @property
    def record_count(self) -> int:
        return 0 if self.records is None else int(len(self.records))


class DashboardController:
    def __init__(self, source: Optional[str] = None, *, loader: Loader = load_collection):
        self.source = source
        self._loader = loader
        self.state = DashboardState()

    def load(self) -> DashboardState:
        """Single attempt; a failure is terminal for this controller."""
        if not self.state.loading:
            return self.state
        try:
            records = self._loader(self.source)
        except CollectionLoadError as exc:
            logger.error("collection load failed (%s): %s", type(exc).__name__, exc)
            self.state = replace(
                self.state,
                loading=False,
                error=exc.user_message(),
                error_type=type(exc).__name__,
                entries=(),
            )
            return self.state
        self.state = self._recompute(replace(self.state, records=records, loading=False))
        return self.state

    def select_feature(self, feature: str | Feature) -> DashboardState:
        spec = get_feature(feature)
        self.state = replace(self.state, feature=spec.feature)
        if self.state.ready:
            self.state = self._recompute(self.state)
        return self.state

    def select_chart_type(self, chart_type: ChartType) -> DashboardState:
        if chart_type not in CHART_TYPES:
            raise ValueError(f"unknown chart type: {chart_type!r}")
        self.state = replace(self.state, chart_type=chart_type)
        return self.state

    def apply_filters(self, filters: ChartFilters) -> DashboardState:
        self.select_chart_type(filters.chart_type)
        return self.select_feature(filters.feature)

    def payload(self, *, include_spec: bool = False) -> Optional[Dict[str, Any]]:
        """Presentation payload, or None while loading or after a failed load."""
        if not self.state.ready:
            return None
        return build_payload(
            get_feature(self.state.feature),
            self.state.entries,
            chart_type=self.state.chart_type,
            include_spec=include_spec,
        )

    def _recompute(self, state: DashboardState) -> DashboardState:
        entries = aggregate(state.records, state.feature)
        logger.debug("feature %s -> %d entr(ies)", state.feature.value, len(entries))
        return replace(state, entries=tuple(entries))
