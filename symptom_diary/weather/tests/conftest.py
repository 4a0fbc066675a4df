"""Shared helpers and fixtures for the weather association test suite."""

from __future__ import annotations

from dataclasses import replace
from datetime import date, timedelta
from typing import Any

import pytest

from symptom_diary.weather.base import DayFeature, WeatherCoverage

BASE_DATE = date(2026, 1, 1)
TZ = "Europe/Berlin"


def make_day(index: int = 0, **overrides: Any) -> DayFeature:
    """A documented, headache-free day with full weather data."""
    day = DayFeature(
        date=(BASE_DATE + timedelta(days=index)).isoformat(),
        documented=True,
        had_headache=False,
        pain_max=0.0,
        had_acute_med=False,
        pressure_mb=1013.0,
        pressure_change_24h=0.0,
        temperature_c=20.0,
        humidity=60.0,
        weather_coverage=WeatherCoverage.ENTRY,
    )
    return replace(day, **overrides)


def make_days(count: int, **overrides: Any) -> list[DayFeature]:
    return [make_day(i, **overrides) for i in range(count)]


def diary(*groups: list[DayFeature]) -> list[DayFeature]:
    """Concatenate groups of days and give every day a distinct date."""
    days = [d for group in groups for d in group]
    return [
        replace(d, date=(BASE_DATE + timedelta(days=i)).isoformat())
        for i, d in enumerate(days)
    ]


def bucket_days(n_days: int, n_headache: int, delta: float, **overrides: Any) -> list[DayFeature]:
    """``n_days`` with the given delta, the first ``n_headache`` of them with a headache."""
    return make_days(n_headache, pressure_change_24h=delta, had_headache=True, pain_max=6.0, **overrides) + make_days(
        n_days - n_headache, pressure_change_24h=delta, **overrides
    )


# ---------------------------------------------------------------------------
# Scenario fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def tiered_diary() -> list[DayFeature]:
    """65 paired days, 10/10/45 across strong/moderate/stable, rates 0.6/0.4/0.2."""
    return diary(
        bucket_days(10, 6, delta=-10.0),
        bucket_days(10, 4, delta=-5.0),
        bucket_days(45, 9, delta=1.0),
    )


@pytest.fixture
def zero_reference_diary() -> list[DayFeature]:
    """Stable bucket of 20 days with no headaches; strong drop 10 days at 0.3."""
    return diary(
        bucket_days(10, 3, delta=-12.0),
        bucket_days(20, 0, delta=0.5),
    )


@pytest.fixture
def confounded_diary() -> list[DayFeature]:
    """Acute medication 0.1 in the strong-drop bucket vs 0.4 in a 25-day stable bucket."""
    return diary(
        make_days(1, pressure_change_24h=-9.0, had_acute_med=True),
        make_days(9, pressure_change_24h=-9.0),
        make_days(10, pressure_change_24h=2.0, had_acute_med=True),
        make_days(15, pressure_change_24h=2.0),
    )
