"""String renderers for association results, shared by report and UI code.

All helpers accept None and return ``PLACEHOLDER_DASH`` for it.
"""

from __future__ import annotations

from symptom_diary.weather.constants import PLACEHOLDER_DASH
from symptom_diary.weather.stats import percent_points, round_half_up

_MINUS = "−"  # U+2212


def fmt_pct(rate: float | None) -> str:
    """0.42 → ``"42%"``."""
    if rate is None:
        return PLACEHOLDER_DASH
    return f"{percent_points(rate)}%"


def fmt_pain(mean: float | None) -> str:
    """6.25 → ``"6.3"``."""
    if mean is None:
        return PLACEHOLDER_DASH
    return f"{round_half_up(mean, 1):.1f}"


def fmt_rr(rr: float | None) -> str:
    """3.0 → ``"3.0×"``."""
    if rr is None:
        return PLACEHOLDER_DASH
    return f"{round_half_up(rr, 1):.1f}×"


def fmt_abs_diff(abs_diff: float | None) -> str:
    """Signed percentage points: 0.4 → ``"+40 pp"``, -0.15 → ``"−15 pp"``."""
    if abs_diff is None:
        return PLACEHOLDER_DASH
    points = percent_points(abs_diff)
    sign = "+" if points >= 0 else _MINUS
    return f"{sign}{abs(points)} pp"
