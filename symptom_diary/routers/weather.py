"""Weather association endpoints: build day features and analyse them.

These routes are stateless: the client posts the diary data and receives
the analysis.  Nothing is persisted.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, HTTPException

from symptom_diary.dependencies import AppSettings
from symptom_diary.models.base import ErrorDetail
from symptom_diary.models.weather import (
    AssociationRequest,
    DayFeatureBuildRead,
    DiaryWeatherRequest,
    WeatherAnalysisRead,
)
from symptom_diary.weather import (
    DayFeatureBuild,
    WeatherAnalysis,
    build_day_features,
    compute_weather_association,
    fmt_abs_diff,
    fmt_pain,
    fmt_pct,
    fmt_rr,
)
from symptom_diary.weather.day_features import InvalidTimezoneError

router = APIRouter(prefix="/weather", tags=["weather"])
logger = logging.getLogger("symptom_diary.routers.weather")


# ---------- Serialization ----------

def _dimension_payload(dimension: dict[str, Any] | None) -> dict[str, Any] | None:
    if dimension is None:
        return None
    for bucket in dimension["buckets"]:
        bucket["headache_rate_display"] = fmt_pct(bucket["headache_rate"])
        bucket["mean_pain_max_display"] = fmt_pain(bucket["mean_pain_max"])
    rr = dimension["relative_risk"]
    if rr is not None:
        rr["rr_display"] = fmt_rr(rr["rr"])
        rr["abs_diff_display"] = fmt_abs_diff(rr["abs_diff"])
    return dimension


def analysis_payload(analysis: WeatherAnalysis) -> dict[str, Any]:
    """Serialize an analysis, adding pre-rendered display strings."""
    data = analysis.to_dict()
    data["pressure_delta_24h"] = _dimension_payload(data["pressure_delta_24h"])
    data["absolute_pressure"] = _dimension_payload(data["absolute_pressure"])
    return data


def _build_from_request(body: DiaryWeatherRequest, settings: AppSettings) -> DayFeatureBuild:
    tz_name = body.timezone or settings.default_timezone
    prefer_pain = (
        body.prefer_pain_as_target
        if body.prefer_pain_as_target is not None
        else settings.prefer_pain_as_target
    )
    try:
        return build_day_features(
            [d.to_record() for d in body.days],
            [e.to_entry() for e in body.entries],
            [w.to_log() for w in body.weather_logs],
            timezone_name=tz_name,
            prefer_pain_as_target=prefer_pain,
        )
    except InvalidTimezoneError as exc:
        logger.info("Rejected weather request: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc


# ---------- Routes ----------

@router.post(
    "/association",
    response_model=WeatherAnalysisRead,
    responses={422: {"model": ErrorDetail}},
)
async def weather_association(body: AssociationRequest) -> Any:
    features = [f.to_feature() for f in body.features]
    if len({f.date for f in features}) != len(features):
        raise HTTPException(status_code=422, detail="Duplicate dates in features")
    counts = body.coverage_counts.to_counts() if body.coverage_counts else None
    return analysis_payload(compute_weather_association(features, counts))


@router.post(
    "/day-features",
    response_model=DayFeatureBuildRead,
    responses={400: {"model": ErrorDetail}},
)
async def day_features(body: DiaryWeatherRequest, settings: AppSettings) -> Any:
    build = _build_from_request(body, settings)
    return {
        "features": [f.to_dict() for f in build.features],
        "coverage_counts": build.coverage_counts.to_dict(),
    }


@router.post(
    "/association/from-diary",
    response_model=WeatherAnalysisRead,
    responses={400: {"model": ErrorDetail}},
)
async def weather_association_from_diary(
    body: DiaryWeatherRequest, settings: AppSettings
) -> Any:
    build = _build_from_request(body, settings)
    analysis = compute_weather_association(build.features, build.coverage_counts)
    return analysis_payload(analysis)
