"""Data models for the weather association engine.

``DayFeature`` is the single input record (one per calendar day, produced by
``day_features.build_day_features`` or any other adapter).  Every other type
here is an output, created fresh on each call to
``compute_weather_association`` and never mutated afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class WeatherCoverage(str, Enum):
    """Where a day's weather reading came from.

    ENTRY     — weather linked directly to a diary entry
    SNAPSHOT  — fallback daily snapshot for that date
    NONE      — no usable reading
    """

    ENTRY = "entry"
    SNAPSHOT = "snapshot"
    NONE = "none"


class ConfidenceTier(str, Enum):
    """Ordered confidence band for one analysis dimension.

    Thresholds (paired days):
        HIGH          >= 60
        MEDIUM        >= 30
        LOW           >= 20
        INSUFFICIENT   < 20  — no statement is made at all
    """

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    INSUFFICIENT = "insufficient"


class PressureDeltaBucket(str, Enum):
    """24h pressure change bands."""

    STRONG_DROP = "strong_drop"
    MODERATE_DROP = "moderate_drop"
    STABLE_OR_RISE = "stable_or_rise"


class AbsolutePressureBucket(str, Enum):
    """Absolute pressure bands."""

    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"


# ---------------------------------------------------------------------------
# Input record
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DayFeature:
    """One calendar day of diary and weather observations.

    Attributes:
        date:                ISO date string (YYYY-MM-DD), unique per day.
        documented:          True if the user logged anything that day.
        had_headache:        Symptom occurred on this day.
        pain_max:            Highest pain level logged; only meaningful
                             when ``had_headache`` is True.
        had_acute_med:       Acute (as-needed) medication was taken.
        pressure_mb:         Absolute pressure, or None if no reading.
        pressure_change_24h: Trailing 24h pressure change, or None.
        temperature_c:       Carried through, not analysed.
        humidity:            Carried through, not analysed.
        weather_coverage:    Provenance of the weather values.
        join_reason:         Debug-only tag describing how weather was joined.
    """

    date: str
    documented: bool
    had_headache: bool
    pain_max: float = 0.0
    had_acute_med: bool = False
    pressure_mb: float | None = None
    pressure_change_24h: float | None = None
    temperature_c: float | None = None
    humidity: float | None = None
    weather_coverage: WeatherCoverage = WeatherCoverage.NONE
    join_reason: str | None = None

    @property
    def has_any_weather_value(self) -> bool:
        return any(
            v is not None
            for v in (
                self.pressure_mb,
                self.temperature_c,
                self.humidity,
                self.pressure_change_24h,
            )
        )

    @property
    def has_delta(self) -> bool:
        return self.pressure_change_24h is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "documented": self.documented,
            "had_headache": self.had_headache,
            "pain_max": self.pain_max,
            "had_acute_med": self.had_acute_med,
            "pressure_mb": self.pressure_mb,
            "pressure_change_24h": self.pressure_change_24h,
            "temperature_c": self.temperature_c,
            "humidity": self.humidity,
            "weather_coverage": self.weather_coverage.value,
            "join_reason": self.join_reason,
        }


@dataclass(frozen=True)
class CoverageCounts:
    """Per-provenance day counts, precomputed by an adapter."""

    days_with_entry_weather: int = 0
    days_with_snapshot_weather: int = 0
    days_with_no_weather: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "days_with_entry_weather": self.days_with_entry_weather,
            "days_with_snapshot_weather": self.days_with_snapshot_weather,
            "days_with_no_weather": self.days_with_no_weather,
        }


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CoverageInfo:
    """How much of the documented diary has usable weather data.

    Ratios are relative to ``days_documented`` and rounded to 2 decimals.
    """

    days_documented: int
    days_with_weather: int
    days_with_delta_24h: int
    ratio_weather: float
    ratio_delta_24h: float
    days_with_entry_weather: int = 0
    days_with_snapshot_weather: int = 0
    days_with_no_weather: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "days_documented": self.days_documented,
            "days_with_weather": self.days_with_weather,
            "days_with_delta_24h": self.days_with_delta_24h,
            "ratio_weather": self.ratio_weather,
            "ratio_delta_24h": self.ratio_delta_24h,
            "days_with_entry_weather": self.days_with_entry_weather,
            "days_with_snapshot_weather": self.days_with_snapshot_weather,
            "days_with_no_weather": self.days_with_no_weather,
        }


@dataclass(frozen=True)
class BucketResult:
    """Headache statistics for one bucket of paired days.

    Attributes:
        key:            Enum value of the bucket (e.g. ``"strong_drop"``).
        label:          Display label including the threshold range.
        n_days:         Number of paired days in the bucket.
        headache_rate:  Headache days / n_days (0.0 when empty).
        mean_pain_max:  Mean pain over headache days only, or None.
        acute_med_rate: Acute-medication days / n_days (0.0 when empty).
    """

    key: str
    label: str
    n_days: int
    headache_rate: float
    mean_pain_max: float | None
    acute_med_rate: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "label": self.label,
            "n_days": self.n_days,
            "headache_rate": self.headache_rate,
            "mean_pain_max": self.mean_pain_max,
            "acute_med_rate": self.acute_med_rate,
        }


@dataclass(frozen=True)
class RelativeRiskResult:
    """Comparison of a bucket's headache rate against the reference bucket.

    ``rr`` is None when the reference rate is zero; ``abs_diff`` is always set.
    """

    reference_label: str
    compare_label: str
    rr: float | None
    abs_diff: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "reference_label": self.reference_label,
            "compare_label": self.compare_label,
            "rr": self.rr,
            "abs_diff": self.abs_diff,
        }


@dataclass(frozen=True)
class DimensionAnalysis:
    """Result for one analysis dimension (pressure delta or absolute pressure).

    Attributes:
        enabled:       False when the dimension was short-circuited as insufficient.
        confidence:    Tier derived from the paired-day count.
        n_paired_days: Documented days with the dimension's value present.
        buckets:       Three buckets in fixed order, or empty when disabled.
        relative_risk: Bucket comparison, or None.
        notes:         Advisory notes, in the order they were raised.
    """

    enabled: bool
    confidence: ConfidenceTier
    n_paired_days: int = 0
    buckets: tuple[BucketResult, ...] = ()
    relative_risk: RelativeRiskResult | None = None
    notes: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "enabled": self.enabled,
            "confidence": self.confidence.value,
            "n_paired_days": self.n_paired_days,
            "buckets": [b.to_dict() for b in self.buckets],
            "relative_risk": self.relative_risk.to_dict() if self.relative_risk else None,
            "notes": list(self.notes),
        }


@dataclass(frozen=True)
class WeatherAnalysis:
    """Complete weather association result for one diary."""

    coverage: CoverageInfo
    pressure_delta_24h: DimensionAnalysis
    absolute_pressure: DimensionAnalysis | None
    disclaimer: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "coverage": self.coverage.to_dict(),
            "pressure_delta_24h": self.pressure_delta_24h.to_dict(),
            "absolute_pressure": (
                self.absolute_pressure.to_dict() if self.absolute_pressure else None
            ),
            "disclaimer": self.disclaimer,
        }
