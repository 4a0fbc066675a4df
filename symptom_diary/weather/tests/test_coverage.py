"""Tests for coverage accounting."""

from __future__ import annotations

import pytest

from symptom_diary.weather.base import CoverageCounts, WeatherCoverage
from symptom_diary.weather.coverage import compute_coverage, count_by_provenance
from symptom_diary.weather.tests.conftest import diary, make_days


class TestComputeCoverage:
    def test_empty_diary_has_zero_ratios(self) -> None:
        coverage = compute_coverage([])
        assert coverage.days_documented == 0
        assert coverage.ratio_weather == 0.0
        assert coverage.ratio_delta_24h == 0.0

    def test_ratios_rounded_to_two_decimals(self) -> None:
        days = diary(
            make_days(20, pressure_change_24h=-2.0),
            make_days(
                10,
                pressure_mb=None,
                pressure_change_24h=None,
                temperature_c=None,
                humidity=None,
                weather_coverage=WeatherCoverage.NONE,
            ),
        )
        coverage = compute_coverage(days)
        assert coverage.days_documented == 30
        assert coverage.days_with_weather == 20
        assert coverage.days_with_delta_24h == 20
        assert coverage.ratio_weather == pytest.approx(0.67)
        assert coverage.ratio_delta_24h == pytest.approx(0.67)

    def test_any_single_weather_value_counts_as_weather(self) -> None:
        days = make_days(
            4, pressure_mb=None, pressure_change_24h=None, temperature_c=None, humidity=55.0
        )
        coverage = compute_coverage(days)
        assert coverage.days_with_weather == 4
        assert coverage.days_with_delta_24h == 0

    def test_provenance_derived_from_tags(self) -> None:
        days = diary(
            make_days(3, weather_coverage=WeatherCoverage.ENTRY),
            make_days(2, weather_coverage=WeatherCoverage.SNAPSHOT),
            make_days(1, weather_coverage=WeatherCoverage.NONE),
        )
        coverage = compute_coverage(days)
        assert coverage.days_with_entry_weather == 3
        assert coverage.days_with_snapshot_weather == 2
        assert coverage.days_with_no_weather == 1

    def test_precomputed_counts_used_verbatim(self) -> None:
        days = make_days(6, weather_coverage=WeatherCoverage.ENTRY)
        counts = CoverageCounts(
            days_with_entry_weather=1,
            days_with_snapshot_weather=4,
            days_with_no_weather=1,
        )
        coverage = compute_coverage(days, counts)
        assert coverage.days_with_entry_weather == 1
        assert coverage.days_with_snapshot_weather == 4
        assert coverage.days_with_no_weather == 1


def test_count_by_provenance_totals_match() -> None:
    days = diary(
        make_days(5, weather_coverage=WeatherCoverage.SNAPSHOT),
        make_days(7, weather_coverage=WeatherCoverage.NONE),
    )
    counts = count_by_provenance(days)
    total = (
        counts.days_with_entry_weather
        + counts.days_with_snapshot_weather
        + counts.days_with_no_weather
    )
    assert total == 12
