from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel


FeatureName = Literal["genre", "classification", "year_decade", "location", "physical_form"]


class ChartFiltersModel(BaseModel):
    feature: FeatureName = "genre"
    chart_type: Literal["bar", "pie"] = "bar"


class FeatureMetaModel(BaseModel):
    feature: FeatureName
    label: str
    title: str
    chart_kind: Literal["ranked-categorical", "ordered-series"]


class MetaFeaturesResponse(BaseModel):
    features: List[FeatureMetaModel]


class HealthResponse(BaseModel):
    ok: bool
    records: int
    error: Optional[str] = None
    type: Optional[str] = None
