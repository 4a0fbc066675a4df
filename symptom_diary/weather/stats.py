"""Small numeric helpers shared by the association engine and formatters."""

from __future__ import annotations

from decimal import ROUND_FLOOR, Decimal
from typing import Sequence

_HALF = Decimal("0.5")


def _half_up(value: Decimal) -> Decimal:
    return (value + _HALF).to_integral_value(rounding=ROUND_FLOOR)


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round with ties going up (towards +inf), unlike built-in ``round()``.

    Works on the shortest decimal repr of ``value`` so 4.35 rounds to 4.4.

    >>> round_half_up(0.125, 2)
    0.13
    >>> round_half_up(-2.5)
    -2.0
    """
    scaled = Decimal(str(value)).scaleb(ndigits)
    return float(_half_up(scaled).scaleb(-ndigits))


def percent_points(value: float) -> int:
    """A 0–1 rate as whole percentage points: 0.125 → 13, -0.15 → -15."""
    return int(_half_up(Decimal(str(value)).scaleb(2)))


def round2(value: float) -> float:
    return round_half_up(value, 2)


def safe_ratio(numerator: float, denominator: float) -> float:
    """Return numerator/denominator rounded to 2 decimals, or 0.0 if denominator is 0."""
    if denominator == 0:
        return 0.0
    return round2(numerator / denominator)


def mean_or_none(values: Sequence[float]) -> float | None:
    if not values:
        return None
    return round2(sum(values) / len(values))
