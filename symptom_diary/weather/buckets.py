"""Partition paired days into fixed, mutually exclusive buckets.

Two dimensions are supported, each with exactly three bands:

    Pressure delta (24h)           Absolute pressure
    ---------------------------    ------------------------
    strong drop     d <= -8        low      p <  1005
    moderate drop   -8 < d <= -3   normal   1005 <= p <= 1025
    stable / rise   d >  -3        high     p >  1025

Every real value maps to exactly one band, so the bucket sizes always add up
to the number of paired days.  The result does not depend on input order.
"""

from __future__ import annotations

import logging
from typing import Callable, Sequence, TypeVar

from symptom_diary.weather.base import (
    AbsolutePressureBucket,
    BucketResult,
    DayFeature,
    PressureDeltaBucket,
)
from symptom_diary.weather.constants import (
    DELTA_MODERATE_DROP,
    DELTA_STRONG_DROP,
    PRESSURE_HIGH,
    PRESSURE_LOW,
)
from symptom_diary.weather.stats import mean_or_none, safe_ratio

logger = logging.getLogger("symptom_diary.weather.buckets")

BucketKey = TypeVar("BucketKey", PressureDeltaBucket, AbsolutePressureBucket)

PRESSURE_DELTA_LABELS: dict[PressureDeltaBucket, str] = {
    PressureDeltaBucket.STRONG_DROP: "Strong drop (≤ −8 hPa)",
    PressureDeltaBucket.MODERATE_DROP: "Moderate drop (−8 to −3 hPa)",
    PressureDeltaBucket.STABLE_OR_RISE: "Stable or rising (> −3 hPa)",
}

ABSOLUTE_PRESSURE_LABELS: dict[AbsolutePressureBucket, str] = {
    AbsolutePressureBucket.LOW: "Low pressure (< 1005 hPa)",
    AbsolutePressureBucket.NORMAL: "Normal (1005–1025 hPa)",
    AbsolutePressureBucket.HIGH: "High pressure (> 1025 hPa)",
}


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


def classify_pressure_delta(delta: float) -> PressureDeltaBucket:
    if delta <= DELTA_STRONG_DROP:
        return PressureDeltaBucket.STRONG_DROP
    if delta <= DELTA_MODERATE_DROP:
        return PressureDeltaBucket.MODERATE_DROP
    return PressureDeltaBucket.STABLE_OR_RISE


def classify_absolute_pressure(pressure: float) -> AbsolutePressureBucket:
    if pressure < PRESSURE_LOW:
        return AbsolutePressureBucket.LOW
    if pressure <= PRESSURE_HIGH:
        return AbsolutePressureBucket.NORMAL
    return AbsolutePressureBucket.HIGH


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------


def build_bucket(key: str, label: str, days: Sequence[DayFeature]) -> BucketResult:
    """Compute headache statistics for one bucket.

    ``mean_pain_max`` averages headache days only; days without a headache
    never pull the mean towards zero.

    Args:
        key:   Bucket enum value.
        label: Display label.
        days:  Days assigned to this bucket (may be empty).

    Returns:
        BucketResult with rates of 0.0 and ``mean_pain_max=None`` when empty.
    """
    n_days = len(days)
    headache_days = [d for d in days if d.had_headache]
    n_acute = sum(1 for d in days if d.had_acute_med)

    return BucketResult(
        key=key,
        label=label,
        n_days=n_days,
        headache_rate=safe_ratio(len(headache_days), n_days),
        mean_pain_max=mean_or_none([float(d.pain_max) for d in headache_days]),
        acute_med_rate=safe_ratio(n_acute, n_days),
    )


def _partition(
    days: Sequence[DayFeature],
    value_of: Callable[[DayFeature], float | None],
    classify: Callable[[float], BucketKey],
    keys: Sequence[BucketKey],
    labels: dict[BucketKey, str],
) -> dict[BucketKey, BucketResult]:
    groups: dict[BucketKey, list[DayFeature]] = {k: [] for k in keys}
    for day in days:
        value = value_of(day)
        if value is None:
            continue
        groups[classify(value)].append(day)

    buckets = {k: build_bucket(k.value, labels[k], groups[k]) for k in keys}
    logger.debug(
        "Bucketed %d days: %s",
        sum(b.n_days for b in buckets.values()),
        ", ".join(f"{k.value}={b.n_days}" for k, b in buckets.items()),
    )
    return buckets


def build_pressure_delta_buckets(
    days: Sequence[DayFeature],
) -> dict[PressureDeltaBucket, BucketResult]:
    """Bucket days by 24h pressure change.  Days without a delta are skipped.

    Returns:
        Dict in fixed order: strong drop, moderate drop, stable or rise.
    """
    return _partition(
        days,
        lambda d: d.pressure_change_24h,
        classify_pressure_delta,
        list(PressureDeltaBucket),
        PRESSURE_DELTA_LABELS,
    )


def build_absolute_pressure_buckets(
    days: Sequence[DayFeature],
) -> dict[AbsolutePressureBucket, BucketResult]:
    """Bucket days by absolute pressure.  Days without a reading are skipped.

    Returns:
        Dict in fixed order: low, normal, high.
    """
    return _partition(
        days,
        lambda d: d.pressure_mb,
        classify_absolute_pressure,
        list(AbsolutePressureBucket),
        ABSOLUTE_PRESSURE_LABELS,
    )
