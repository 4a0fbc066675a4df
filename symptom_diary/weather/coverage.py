"""Coverage accounting: how many documented days carry usable weather data."""

from __future__ import annotations

import logging
from typing import Sequence

from symptom_diary.weather.base import (
    CoverageCounts,
    CoverageInfo,
    DayFeature,
    WeatherCoverage,
)
from symptom_diary.weather.stats import safe_ratio

logger = logging.getLogger("symptom_diary.weather.coverage")


def count_by_provenance(documented: Sequence[DayFeature]) -> CoverageCounts:
    """Tally documented days by their ``weather_coverage`` tag."""
    entry = snapshot = none = 0
    for day in documented:
        if day.weather_coverage == WeatherCoverage.ENTRY:
            entry += 1
        elif day.weather_coverage == WeatherCoverage.SNAPSHOT:
            snapshot += 1
        else:
            none += 1
    return CoverageCounts(
        days_with_entry_weather=entry,
        days_with_snapshot_weather=snapshot,
        days_with_no_weather=none,
    )


def compute_coverage(
    documented: Sequence[DayFeature],
    coverage_counts: CoverageCounts | None = None,
) -> CoverageInfo:
    """Build ``CoverageInfo`` for the documented subset of a diary.

    Args:
        documented:      Day features with ``documented=True`` only.
        coverage_counts: Provenance counts computed by the adapter.  When
                         given they are used verbatim; otherwise they are
                         derived from each day's ``weather_coverage`` tag.

    Returns:
        CoverageInfo with ratios rounded to 2 decimals (0.0 for an empty diary).
    """
    n_documented = len(documented)
    n_weather = sum(1 for d in documented if d.has_any_weather_value)
    n_delta = sum(1 for d in documented if d.has_delta)

    if coverage_counts is None:
        coverage_counts = count_by_provenance(documented)
    else:
        logger.debug("Using precomputed provenance counts: %s", coverage_counts)

    return CoverageInfo(
        days_documented=n_documented,
        days_with_weather=n_weather,
        days_with_delta_24h=n_delta,
        ratio_weather=safe_ratio(n_weather, n_documented),
        ratio_delta_24h=safe_ratio(n_delta, n_documented),
        days_with_entry_weather=coverage_counts.days_with_entry_weather,
        days_with_snapshot_weather=coverage_counts.days_with_snapshot_weather,
        days_with_no_weather=coverage_counts.days_with_no_weather,
    )
