"""Weather–headache association: the engine's single entry point.

Turns a diary's day features into a confidence-tiered summary along two
independent dimensions:

1. 24h pressure change (primary) — buckets, relative risk, advisory notes.
2. Absolute pressure (secondary) — buckets and notes only, and only when at
   least ``MIN_DAYS_ABSOLUTE_PRESSURE`` paired days exist; otherwise the
   dimension is absent (None) rather than "insufficient".

Only documented days are analysed.  The computation is pure: no I/O, no
caching, no mutation of the caller's features.  Statistical edge cases
(empty buckets, zero reference rate, empty diary) produce notes and None
markers, never exceptions.

Usage::

    from symptom_diary.weather import compute_weather_association

    analysis = compute_weather_association(features)
    if analysis.pressure_delta_24h.enabled:
        rr = analysis.pressure_delta_24h.relative_risk
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Mapping, Sequence

from symptom_diary.weather.base import (
    AbsolutePressureBucket,
    BucketResult,
    ConfidenceTier,
    CoverageCounts,
    DayFeature,
    DimensionAnalysis,
    PressureDeltaBucket,
    WeatherAnalysis,
)
from symptom_diary.weather.buckets import (
    build_absolute_pressure_buckets,
    build_pressure_delta_buckets,
)
from symptom_diary.weather.confidence import classify_confidence
from symptom_diary.weather.confounding import detect_confounding
from symptom_diary.weather.constants import (
    MIN_DAYS_ABSOLUTE_PRESSURE,
    MIN_DAYS_FOR_STATEMENT,
    MIN_DAYS_PER_BUCKET,
    SPARSE_COVERAGE_RATIO,
    WEATHER_DISCLAIMER,
)
from symptom_diary.weather.coverage import compute_coverage
from symptom_diary.weather.relative_risk import compare_against_reference
from symptom_diary.weather.stats import safe_ratio

logger = logging.getLogger("symptom_diary.weather.association")


@dataclass(frozen=True)
class _Dimension:
    """Static description of one analysis dimension."""

    data_label: str
    value_of: Callable[[DayFeature], float | None]
    build_buckets: Callable[[Sequence[DayFeature]], Mapping]
    reference: PressureDeltaBucket | AbsolutePressureBucket
    # Most extreme first; None = buckets only, no relative risk
    comparisons: tuple | None


_PRESSURE_DELTA = _Dimension(
    data_label="24h pressure change",
    value_of=lambda d: d.pressure_change_24h,
    build_buckets=build_pressure_delta_buckets,
    reference=PressureDeltaBucket.STABLE_OR_RISE,
    comparisons=(PressureDeltaBucket.STRONG_DROP, PressureDeltaBucket.MODERATE_DROP),
)

# Relative risk is intentionally not computed for absolute pressure.
_ABSOLUTE_PRESSURE = _Dimension(
    data_label="absolute pressure",
    value_of=lambda d: d.pressure_mb,
    build_buckets=build_absolute_pressure_buckets,
    reference=AbsolutePressureBucket.NORMAL,
    comparisons=None,
)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def compute_weather_association(
    features: Iterable[DayFeature],
    coverage_counts: CoverageCounts | None = None,
) -> WeatherAnalysis:
    """Compute the weather association summary for a diary.

    Args:
        features:        One DayFeature per calendar day.  Undocumented days
                         are ignored.  Never modified.
        coverage_counts: Optional per-provenance counts from the adapter,
                         used verbatim in the coverage block.

    Returns:
        A new, immutable WeatherAnalysis.  The disclaimer is always set.
    """
    documented = tuple(f for f in features if f.documented)
    coverage = compute_coverage(documented, coverage_counts)

    pressure_delta = _analyze_dimension(_PRESSURE_DELTA, documented)

    absolute_pressure: DimensionAnalysis | None = None
    n_abs = sum(1 for d in documented if d.pressure_mb is not None)
    if n_abs >= MIN_DAYS_ABSOLUTE_PRESSURE:
        absolute_pressure = _analyze_dimension(_ABSOLUTE_PRESSURE, documented)
    else:
        logger.debug(
            "Absolute pressure skipped: %d paired days (need %d)",
            n_abs, MIN_DAYS_ABSOLUTE_PRESSURE,
        )

    logger.info(
        "Weather association: %d documented days, delta=%s (%d paired), absolute=%s",
        coverage.days_documented,
        pressure_delta.confidence.value,
        pressure_delta.n_paired_days,
        absolute_pressure.confidence.value if absolute_pressure else "skipped",
    )

    return WeatherAnalysis(
        coverage=coverage,
        pressure_delta_24h=pressure_delta,
        absolute_pressure=absolute_pressure,
        disclaimer=WEATHER_DISCLAIMER,
    )


# ---------------------------------------------------------------------------
# Per-dimension analysis
# ---------------------------------------------------------------------------


def _analyze_dimension(
    dimension: _Dimension,
    documented: Sequence[DayFeature],
) -> DimensionAnalysis:
    """Run steps 1–6 of the association pipeline for a single dimension.

    Args:
        dimension:  Which measurement to analyse and how.
        documented: Documented days only.

    Returns:
        DimensionAnalysis; disabled with a single note when insufficient.
    """
    paired = [d for d in documented if dimension.value_of(d) is not None]
    n_paired = len(paired)
    confidence = classify_confidence(n_paired)

    if confidence == ConfidenceTier.INSUFFICIENT:
        if n_paired == 0:
            note = f"No {dimension.data_label} data available."
        else:
            note = (
                f"Only {n_paired} days with {dimension.data_label} data; "
                f"at least {MIN_DAYS_FOR_STATEMENT} required."
            )
        return DimensionAnalysis(
            enabled=False,
            confidence=confidence,
            n_paired_days=n_paired,
            notes=(note,),
        )

    notes: list[str] = []
    by_key = dimension.build_buckets(paired)
    buckets: list[BucketResult] = list(by_key.values())

    for bucket in buckets:
        if 0 < bucket.n_days < MIN_DAYS_PER_BUCKET:
            notes.append(
                f"{bucket.label}: only {bucket.n_days} days "
                f"(< {MIN_DAYS_PER_BUCKET}), limited significance."
            )

    relative_risk = None
    if dimension.comparisons is not None:
        relative_risk = compare_against_reference(
            by_key[dimension.reference],
            [by_key[k] for k in dimension.comparisons],
        )

    if safe_ratio(n_paired, len(documented)) < SPARSE_COVERAGE_RATIO:
        notes.append(
            f"{dimension.data_label.capitalize()} is only available for part of "
            "the documented days; significance may be limited."
        )

    confounding_note = detect_confounding(buckets)
    if confounding_note:
        notes.append(confounding_note)

    return DimensionAnalysis(
        enabled=True,
        confidence=confidence,
        n_paired_days=n_paired,
        buckets=tuple(buckets),
        relative_risk=relative_risk,
        notes=tuple(notes),
    )
