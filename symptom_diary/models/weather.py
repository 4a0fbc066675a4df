"""Pydantic models for the weather association API: day features, diary input, analysis output."""

from __future__ import annotations

import datetime as dt

from pydantic import Field

from symptom_diary.models.base import DiaryBase
from symptom_diary.weather import (
    CoverageCounts,
    DayFeature,
    DayRecord,
    DiaryEntry,
    WeatherCoverage,
    WeatherLog,
)


# ---------- Day features (engine input) ----------

class DayFeatureIn(DiaryBase):
    date: dt.date
    documented: bool
    had_headache: bool
    pain_max: float = Field(default=0.0, ge=0, le=10)
    had_acute_med: bool = False
    pressure_mb: float | None = Field(default=None, ge=850, le=1100)
    pressure_change_24h: float | None = Field(default=None, ge=-60, le=60)
    temperature_c: float | None = None
    humidity: float | None = Field(default=None, ge=0, le=100)
    weather_coverage: WeatherCoverage = WeatherCoverage.NONE
    join_reason: str | None = None

    def to_feature(self) -> DayFeature:
        return DayFeature(
            date=self.date.isoformat(),
            documented=self.documented,
            had_headache=self.had_headache,
            pain_max=self.pain_max,
            had_acute_med=self.had_acute_med,
            pressure_mb=self.pressure_mb,
            pressure_change_24h=self.pressure_change_24h,
            temperature_c=self.temperature_c,
            humidity=self.humidity,
            weather_coverage=self.weather_coverage,
            join_reason=self.join_reason,
        )


class DayFeatureRead(DiaryBase):
    date: str
    documented: bool
    had_headache: bool
    pain_max: float
    had_acute_med: bool
    pressure_mb: float | None
    pressure_change_24h: float | None
    temperature_c: float | None
    humidity: float | None
    weather_coverage: WeatherCoverage
    join_reason: str | None


class CoverageCountsIn(DiaryBase):
    days_with_entry_weather: int = Field(ge=0)
    days_with_snapshot_weather: int = Field(ge=0)
    days_with_no_weather: int = Field(ge=0)

    def to_counts(self) -> CoverageCounts:
        return CoverageCounts(**self.model_dump())


class CoverageCountsRead(CoverageCountsIn):
    pass


class AssociationRequest(DiaryBase):
    features: list[DayFeatureIn]
    coverage_counts: CoverageCountsIn | None = None


# ---------- Diary input (adapter) ----------

class DayRecordIn(DiaryBase):
    date: dt.date
    documented: bool
    headache: bool = False
    pain_max: float | None = Field(default=None, ge=0, le=10)
    acute_med_used: bool = False

    def to_record(self) -> DayRecord:
        return DayRecord(
            date=self.date.isoformat(),
            documented=self.documented,
            headache=self.headache,
            pain_max=self.pain_max,
            acute_med_used=self.acute_med_used,
        )


class DiaryEntryIn(DiaryBase):
    selected_date: dt.date | None = None
    selected_time: str | None = None
    occurred_at: str | None = None
    timestamp_created: str | None = None
    weather_id: int | None = None
    entry_kind: str | None = None
    pain_level: str | float | None = None

    def to_entry(self) -> DiaryEntry:
        data = self.model_dump()
        if self.selected_date is not None:
            data["selected_date"] = self.selected_date.isoformat()
        return DiaryEntry(**data)


class WeatherLogIn(DiaryBase):
    id: int
    snapshot_date: dt.date | None = None
    requested_at: str | None = None
    pressure_mb: float | None = None
    pressure_change_24h: float | None = None
    temperature_c: float | None = None
    humidity: float | None = None

    def to_log(self) -> WeatherLog:
        data = self.model_dump()
        if self.snapshot_date is not None:
            data["snapshot_date"] = self.snapshot_date.isoformat()
        return WeatherLog(**data)


class DiaryWeatherRequest(DiaryBase):
    days: list[DayRecordIn]
    entries: list[DiaryEntryIn] = Field(default_factory=list)
    weather_logs: list[WeatherLogIn] = Field(default_factory=list)
    timezone: str | None = None  # falls back to settings.default_timezone
    prefer_pain_as_target: bool | None = None


class DayFeatureBuildRead(DiaryBase):
    features: list[DayFeatureRead]
    coverage_counts: CoverageCountsRead


# ---------- Analysis output ----------

class CoverageInfoRead(DiaryBase):
    days_documented: int
    days_with_weather: int
    days_with_delta_24h: int
    ratio_weather: float
    ratio_delta_24h: float
    days_with_entry_weather: int
    days_with_snapshot_weather: int
    days_with_no_weather: int


class BucketRead(DiaryBase):
    key: str
    label: str
    n_days: int
    headache_rate: float
    mean_pain_max: float | None
    acute_med_rate: float
    # Pre-rendered strings for clients that do not format numbers themselves
    headache_rate_display: str
    mean_pain_max_display: str


class RelativeRiskRead(DiaryBase):
    reference_label: str
    compare_label: str
    rr: float | None
    abs_diff: float
    rr_display: str
    abs_diff_display: str


class DimensionRead(DiaryBase):
    enabled: bool
    confidence: str
    n_paired_days: int
    buckets: list[BucketRead]
    relative_risk: RelativeRiskRead | None
    notes: list[str]


class WeatherAnalysisRead(DiaryBase):
    coverage: CoverageInfoRead
    pressure_delta_24h: DimensionRead
    absolute_pressure: DimensionRead | None
    disclaimer: str
