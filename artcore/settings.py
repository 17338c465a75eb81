from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List


PROJECT_ROOT = Path(__file__).resolve().parents[1]
DEFAULT_SOURCE = PROJECT_ROOT / "art_data.csv"
DEFAULT_FETCH_TIMEOUT = 30.0
DEFAULT_CORS_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000"]


@dataclass(frozen=True)
class Settings:
    source: str = str(DEFAULT_SOURCE)
    fetch_timeout: float = DEFAULT_FETCH_TIMEOUT
    log_level: str = "INFO"
    cors_origins: List[str] = field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))


def _as_float(value: str | None, default: float) -> float:
    if not value:
        return default
    try:
        out = float(value)
    except ValueError:
        return default
    return out if out > 0 else default


def get_settings() -> Settings:
    """Read settings from the environment; called per use so overrides apply."""
    origins = [o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()]
    return Settings(
        source=os.getenv("ART_DATA_SOURCE") or str(DEFAULT_SOURCE),
        fetch_timeout=_as_float(os.getenv("ART_FETCH_TIMEOUT"), DEFAULT_FETCH_TIMEOUT),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        cors_origins=origins or list(DEFAULT_CORS_ORIGINS),
    )
