"""Sample-size confidence classification.

A dimension's confidence depends only on how many paired days (documented
days with the dimension's measurement present) back it.  Cut-offs are checked
highest first:

    >= 60  high
    >= 30  medium
    >= 20  low
     < 20  insufficient
"""

from __future__ import annotations

from symptom_diary.weather.base import ConfidenceTier
from symptom_diary.weather.constants import (
    HIGH_CONFIDENCE_DAYS,
    MEDIUM_CONFIDENCE_DAYS,
    MIN_DAYS_FOR_STATEMENT,
)


def classify_confidence(n_paired_days: int) -> ConfidenceTier:
    if n_paired_days >= HIGH_CONFIDENCE_DAYS:
        return ConfidenceTier.HIGH
    if n_paired_days >= MEDIUM_CONFIDENCE_DAYS:
        return ConfidenceTier.MEDIUM
    if n_paired_days >= MIN_DAYS_FOR_STATEMENT:
        return ConfidenceTier.LOW
    return ConfidenceTier.INSUFFICIENT
