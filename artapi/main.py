from __future__ import annotations

import logging
import math
from contextlib import asynccontextmanager

import numpy as np
import pandas as pd
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from artapi.schemas import ChartFiltersModel, HealthResponse, MetaFeaturesResponse
from artcore.aggregate import aggregate
from artcore.charts import entries_frame
from artcore.features import Feature, list_features
from artcore.filters import normalize_filters
from artcore.metrics_chart import compute_chart
from artcore.metrics_debug import compute_debug
from artcore.session import DashboardController
from artcore.settings import get_settings
from artcore.setup_logging import setup_logging


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the collection once; a failed load stays failed for the process."""
    settings = get_settings()
    setup_logging(settings.log_level)
    controller = DashboardController(settings.source)
    controller.load()
    app.state.controller = controller
    yield


app = FastAPI(title="Art Collection Dashboard API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _json(data: object, status_code: int = 200) -> JSONResponse:
    """Return JSON with safe encoding for pandas/numpy objects."""

    def _safe_float(value: object) -> float | None:
        try:
            out = float(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return None
        if math.isnan(out) or math.isinf(out):
            return None
        return out

    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(
            data,
            custom_encoder={
                type(pd.NA): lambda _: None,
                np.integer: int,
                float: _safe_float,
                np.floating: _safe_float,
                np.bool_: bool,
            },
        ),
    )


def _error(exc_type: str, message: str, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, "type": exc_type})


def _records_or_error(request: Request):
    state = request.app.state.controller.state
    if state.ready:
        return state.records, None
    if state.loading:
        return None, _error("Loading", "Loading the collection data...", 503)
    return None, _error(state.error_type or "CollectionLoadError", state.error or "collection unavailable", 503)


@app.get("/healthz", response_model=HealthResponse)
def health(request: Request):
    state = request.app.state.controller.state
    return {"ok": state.ready, "records": state.record_count, "error": state.error, "type": state.error_type}


@app.get("/meta/features", response_model=MetaFeaturesResponse)
def meta_features():
    return {"features": list_features()}


@app.post("/chart")
def chart(filters: ChartFiltersModel, request: Request):
    records, err = _records_or_error(request)
    if err is not None:
        return err
    try:
        f = normalize_filters(filters.model_dump())
        return _json(compute_chart(f, records))
    except Exception as exc:
        logger.exception("chart failed")
        return _error(type(exc).__name__, str(exc), 500)


@app.get("/debug")
def debug(request: Request):
    records, err = _records_or_error(request)
    if err is not None:
        return err
    try:
        return _json(compute_debug(records))
    except Exception as exc:
        logger.exception("debug failed")
        return _error(type(exc).__name__, str(exc), 500)


@app.get("/export/{feature}")
def export_feature(feature: Feature, request: Request):
    records, err = _records_or_error(request)
    if err is not None:
        return err
    try:
        export_df = entries_frame(aggregate(records, feature))
        csv_bytes = export_df.to_csv(index=False).encode("utf-8")
        return Response(
            content=csv_bytes,
            media_type="text/csv",
            headers={"Content-Disposition": f"attachment; filename={feature.value}.csv"},
        )
    except Exception as exc:
        logger.exception("export failed")
        return _error(type(exc).__name__, str(exc), 500)
