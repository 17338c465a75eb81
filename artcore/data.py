from __future__ import annotations

import csv
import io
import logging
from functools import lru_cache
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

import pandas as pd
import requests

from artcore.errors import FetchError, NoDataError, ParseError
from artcore.settings import get_settings


logger = logging.getLogger(__name__)

RECORD_COLUMNS = [
    "field_collection_type",
    "field_identifier",
    "title",
    "field_alternative_title",
    "artist",
    "field_genre",
    "field_date",
    "field_place_published",
    "field_description_long",
    "field_subject",
    "field_extent",
    "field_geographic_subject",
    "field_language",
    "field_classification",
    "field_physical_form",
    "field_place_published_objects",
    "field_genre_objects",
]

SourceSignature = Tuple[str, Optional[float]]


def is_url(source: str) -> bool:
    return source.lower().startswith(("http://", "https://"))


def source_signature(source: str) -> SourceSignature:
    """(source, mtime) for local files so edits invalidate the cache; URLs load once."""
    if is_url(source):
        return source, None
    try:
        return source, Path(source).stat().st_mtime
    except OSError:
        return source, None


def fetch_source_bytes(source: str, *, timeout: float = 30.0) -> bytes:
    """Single attempt to obtain the raw resource; no retries."""
    if is_url(source):
        try:
            r = requests.get(source, timeout=timeout)
        except requests.RequestException as exc:
            raise FetchError(str(exc)) from exc
        if not r.ok:
            raise FetchError(f"Failed to fetch CSV: {r.status_code} {r.reason}")
        return r.content
    try:
        return Path(source).read_bytes()
    except OSError as exc:
        raise FetchError(f"{exc.strerror or exc}: {source}") from exc


def decode_text(raw: bytes) -> str:
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise ParseError(f"source is not valid UTF-8 ({exc.reason})") from exc


def repair_rows(text: str) -> Tuple[List[str], List[List[str]], int]:
    """Split CSV text into header + rows, padding or truncating ragged rows.

    Blank lines and rows whose every cell is blank are skipped.
    """
    header: Optional[List[str]] = None
    rows: List[List[str]] = []
    ragged = 0
    try:
        for row in csv.reader(io.StringIO(text)):
            if not any(cell.strip() for cell in row):
                continue
            if header is None:
                header = [cell.strip() for cell in row]
                continue
            if len(row) != len(header):
                ragged += 1
                row = (row + [""] * len(header))[: len(header)]
            rows.append(row)
    except csv.Error as exc:
        raise ParseError(str(exc)) from exc
    if header is None:
        raise ParseError("no header row found")
    return header, rows, ragged


def parse_records(text: str | bytes) -> pd.DataFrame:
    """Parse header-driven CSV text into one row per record.

    Columns are type-inferred by pandas (numeric / boolean where every value
    agrees, otherwise text). Only empty cells become null; tokens such as
    "NA" or "None" stay text. Ragged rows are repaired and counted in
    ``df.attrs["ragged_rows"]``.
    """
    if isinstance(text, bytes):
        text = decode_text(text)
    if not text.strip():
        raise ParseError("source is empty")

    header, rows, ragged = repair_rows(text)
    if not rows:
        raise NoDataError()
    if ragged:
        logger.warning("repaired %d ragged row(s) to %d columns", ragged, len(header))

    buf = io.StringIO()
    writer = csv.writer(buf)
    writer.writerow(header)
    writer.writerows(rows)
    buf.seek(0)
    try:
        df = pd.read_csv(buf, keep_default_na=False, na_values=[""])
    except (pd.errors.EmptyDataError, pd.errors.ParserError) as exc:
        raise ParseError(str(exc)) from exc

    df.attrs["ragged_rows"] = ragged
    return df


@lru_cache(maxsize=4)
def _load_collection_cached(signature: SourceSignature, timeout: float) -> pd.DataFrame:
    source, _ = signature
    raw = fetch_source_bytes(source, timeout=timeout)
    df = parse_records(raw)
    logger.info("loaded %d record(s) with %d column(s) from %s", len(df), len(df.columns), source)
    missing = [c for c in ("field_genre", "field_date", "field_classification") if c not in df.columns]
    if missing:
        logger.warning("source %s has no %s column(s)", source, ", ".join(missing))
    return df


def load_collection(source: Optional[str] = None, *, timeout: Optional[float] = None) -> pd.DataFrame:
    """Fetch and parse the collection once per source signature.

    Raises FetchError, ParseError or NoDataError. Failures are not cached.
    The returned frame is shared; callers must not mutate it.
    """
    settings = get_settings()
    source = source or settings.source
    return _load_collection_cached(source_signature(source), timeout or settings.fetch_timeout)


def clear_collection_cache() -> None:
    _load_collection_cached.cache_clear()


def present_columns(df: pd.DataFrame, cols: Iterable[str] = RECORD_COLUMNS) -> List[str]:
    return [c for c in cols if c in df.columns]
