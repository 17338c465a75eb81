from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Literal, Mapping, Optional

from artcore import normalize


ChartKind = Literal["ranked-categorical", "ordered-series"]
RANKED: ChartKind = "ranked-categorical"
SERIES: ChartKind = "ordered-series"
TOP_N = 10


class Feature(str, Enum):
    GENRE = "genre"
    CLASSIFICATION = "classification"
    YEAR_DECADE = "year_decade"
    LOCATION = "location"
    PHYSICAL_FORM = "physical_form"


@dataclass(frozen=True)
class FeatureSpec:
    feature: Feature
    label: str
    title: str
    chart_kind: ChartKind
    source_fields: tuple
    normalizer: Callable[[Mapping[str, Any]], Optional[str]]

    @property
    def is_ranked(self) -> bool:
        return self.chart_kind == RANKED


FEATURES: Dict[Feature, FeatureSpec] = {
    Feature.GENRE: FeatureSpec(
        Feature.GENRE,
        "Genres",
        "Top 10 Genres in the Collection",
        RANKED,
        ("field_genre",),
        normalize.norm_genre,
    ),
    Feature.CLASSIFICATION: FeatureSpec(
        Feature.CLASSIFICATION,
        "Classifications",
        "Top 10 Classifications in the Collection",
        RANKED,
        ("field_classification",),
        normalize.norm_classification,
    ),
    Feature.YEAR_DECADE: FeatureSpec(
        Feature.YEAR_DECADE,
        "Publication Years",
        "Publication Years Distribution",
        SERIES,
        ("field_date",),
        normalize.norm_decade,
    ),
    Feature.LOCATION: FeatureSpec(
        Feature.LOCATION,
        "Publication Locations",
        "Top 10 Publication Locations",
        RANKED,
        ("field_place_published", "field_place_published_objects"),
        normalize.norm_location,
    ),
    Feature.PHYSICAL_FORM: FeatureSpec(
        Feature.PHYSICAL_FORM,
        "Physical Forms",
        "Top 10 Physical Forms",
        RANKED,
        ("field_physical_form",),
        normalize.norm_physical_form,
    ),
}

FEATURE_ALIASES = {
    "year": Feature.YEAR_DECADE,
    "year-decade": Feature.YEAR_DECADE,
    "decade": Feature.YEAR_DECADE,
    "physical-form": Feature.PHYSICAL_FORM,
}

DEFAULT_FEATURE = Feature.GENRE


def get_feature(name: str | Feature) -> FeatureSpec:
    if isinstance(name, Feature):
        return FEATURES[name]
    key = str(name).strip().lower()
    if key in FEATURE_ALIASES:
        return FEATURES[FEATURE_ALIASES[key]]
    try:
        return FEATURES[Feature(key)]
    except ValueError:
        raise ValueError(f"unknown feature: {name!r}") from None


def list_features() -> List[Dict[str, str]]:
    return [
        {"feature": spec.feature.value, "label": spec.label, "title": spec.title, "chart_kind": spec.chart_kind}
        for spec in FEATURES.values()
    ]
