"""Weather–headache association engine.

Deterministic, side-effect-free analysis of how documented headache days
relate to barometric pressure.  No model fitting, no imputation, fixed
thresholds.

Modules:
    base           — DayFeature input record and immutable result types
    constants      — fixed thresholds, disclaimer text
    coverage       — coverage accounting per weather provenance
    buckets        — exclusive bucketing by pressure delta / absolute pressure
    confidence     — sample-size confidence tiers
    relative_risk  — bucket comparison with safe division
    confounding    — acute-medication confounding note
    association    — compute_weather_association() entry point
    format         — percentage / pain / RR / difference renderers
    day_features   — adapter joining diary days with weather logs
"""

from symptom_diary.weather.association import compute_weather_association
from symptom_diary.weather.base import (
    BucketResult,
    ConfidenceTier,
    CoverageCounts,
    CoverageInfo,
    DayFeature,
    DimensionAnalysis,
    RelativeRiskResult,
    WeatherAnalysis,
    WeatherCoverage,
)
from symptom_diary.weather.day_features import (
    DayFeatureBuild,
    DayRecord,
    DiaryEntry,
    WeatherLog,
    build_day_features,
)
from symptom_diary.weather.format import fmt_abs_diff, fmt_pain, fmt_pct, fmt_rr

__all__ = [
    "compute_weather_association",
    "build_day_features",
    "DayFeature",
    "DayRecord",
    "DiaryEntry",
    "WeatherLog",
    "DayFeatureBuild",
    "CoverageCounts",
    "CoverageInfo",
    "BucketResult",
    "RelativeRiskResult",
    "DimensionAnalysis",
    "WeatherAnalysis",
    "ConfidenceTier",
    "WeatherCoverage",
    "fmt_pct",
    "fmt_pain",
    "fmt_rr",
    "fmt_abs_diff",
]
