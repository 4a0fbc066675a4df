"""Tests for the display formatters."""

from __future__ import annotations

import pytest

from symptom_diary.weather.format import fmt_abs_diff, fmt_pain, fmt_pct, fmt_rr


@pytest.mark.parametrize("fmt", [fmt_pct, fmt_pain, fmt_rr, fmt_abs_diff])
def test_none_renders_placeholder(fmt) -> None:
    assert fmt(None) == "–"


class TestFmtPct:
    def test_whole_percent(self) -> None:
        assert fmt_pct(0.42) == "42%"
        assert fmt_pct(0.0) == "0%"
        assert fmt_pct(1.0) == "100%"

    def test_half_rounds_up(self) -> None:
        assert fmt_pct(0.125) == "13%"


class TestFmtPain:
    def test_one_decimal(self) -> None:
        assert fmt_pain(7.0) == "7.0"
        assert fmt_pain(6.25) == "6.3"
        assert fmt_pain(4.33) == "4.3"


class TestFmtRR:
    def test_multiplication_suffix(self) -> None:
        assert fmt_rr(3.0) == "3.0×"
        assert fmt_rr(1.25) == "1.3×"


class TestFmtAbsDiff:
    def test_positive_has_plus(self) -> None:
        assert fmt_abs_diff(0.4) == "+40 pp"

    def test_negative_uses_minus_sign(self) -> None:
        assert fmt_abs_diff(-0.15) == "−15 pp"

    def test_zero_is_positive(self) -> None:
        assert fmt_abs_diff(0.0) == "+0 pp"


def test_decimal_ties_round_up() -> None:
    assert fmt_pain(4.35) == "4.4"
    assert fmt_pct(0.145) == "15%"
    assert fmt_abs_diff(0.285) == "+29 pp"
