"""Per-feature field normalization.

Each rule takes one record (a mapping or a pandas row) and returns the
canonical grouping key for that record, or ``None`` when the record has no
usable value and must be left out of the feature's counts.
"""

from __future__ import annotations

import re
from typing import Any, Mapping, Optional

import pandas as pd


YEAR_RE = re.compile(r"\d{4}")
TRAILING_COLON_RE = re.compile(r"\s*:\s*$")


def as_text(value: Any) -> Optional[str]:
    """Render a type-inferred cell back to trimmed text; blanks and nulls are None."""
    if value is None or value is pd.NA or value is pd.NaT:
        return None
    if isinstance(value, float):
        if pd.isna(value):
            return None
        if value.is_integer():
            value = int(value)
    s = str(value).strip()
    return s or None


def _field(rec: Mapping[str, Any], name: str) -> Optional[str]:
    return as_text(rec.get(name))


def norm_genre(rec: Mapping[str, Any]) -> Optional[str]:
    return _field(rec, "field_genre")


def norm_classification(rec: Mapping[str, Any]) -> Optional[str]:
    return _field(rec, "field_classification")


def extract_year(value: Any) -> Optional[int]:
    """First four consecutive digits anywhere: 'circa 1923-1925' -> 1923, 19230415 -> 1923."""
    s = as_text(value)
    if s is None:
        return None
    match = YEAR_RE.search(s)
    if not match:
        return None
    return int(match.group(0))


def decade_label(year: int) -> str:
    return f"{(year // 10) * 10}s"


def decade_from_label(label: str) -> int:
    return int(label[:-1]) if label.endswith("s") else int(label)


def norm_decade(rec: Mapping[str, Any]) -> Optional[str]:
    year = extract_year(rec.get("field_date"))
    return decade_label(year) if year is not None else None


def clean_location(value: Any) -> Optional[str]:
    """'Paris, France :' -> 'Paris'; 'London :' -> 'London'."""
    s = as_text(value)
    if s is None:
        return None
    location = TRAILING_COLON_RE.sub("", s).strip()
    if "," in location:
        location = location.split(",")[0].strip()
    return location or None


def norm_location(rec: Mapping[str, Any]) -> Optional[str]:
    # objects variant only when the primary field is blank
    place = _field(rec, "field_place_published") or _field(rec, "field_place_published_objects")
    return clean_location(place)


def clean_physical_form(value: Any) -> Optional[str]:
    """'Posters|Lithographs--Color' -> 'Posters'."""
    s = as_text(value)
    if s is None:
        return None
    form = s.split("|")[0].split("--")[0].strip()
    return form or None


def norm_physical_form(rec: Mapping[str, Any]) -> Optional[str]:
    return clean_physical_form(rec.get("field_physical_form"))
