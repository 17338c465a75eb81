from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal

from artcore.features import DEFAULT_FEATURE, Feature, get_feature


logger = logging.getLogger(__name__)

ChartType = Literal["bar", "pie"]
CHART_TYPES = ("bar", "pie")


@dataclass(frozen=True)
class ChartFilters:
    feature: Feature = DEFAULT_FEATURE
    chart_type: ChartType = "bar"


def normalize_filters(raw: dict) -> ChartFilters:
    """Coerce loosely typed UI / request input; bad values fall back to defaults."""
    feature = DEFAULT_FEATURE
    name = raw.get("feature")
    if name:
        try:
            feature = get_feature(name).feature
        except ValueError:
            logger.warning("unknown feature %r, using %s", name, DEFAULT_FEATURE.value)

    chart_type = str(raw.get("chart_type") or "bar").strip().lower()
    if chart_type not in CHART_TYPES:
        chart_type = "bar"
    return ChartFilters(feature=feature, chart_type=chart_type)
