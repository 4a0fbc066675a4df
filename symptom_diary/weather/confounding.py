"""Acute-medication confounding heuristic.

Acute medication suppresses measured pain, so if buckets differ strongly in
how often it was taken, any difference between them may partly reflect
medication use rather than weather.  The result is an advisory note only.
"""

from __future__ import annotations

import logging
from typing import Sequence

from symptom_diary.weather.base import BucketResult
from symptom_diary.weather.constants import (
    CONFOUNDING_RATE_SPREAD,
    MIN_DAYS_CONFOUNDING_HINT,
    MIN_DAYS_PER_BUCKET,
)
from symptom_diary.weather.stats import round2

logger = logging.getLogger("symptom_diary.weather.confounding")

CONFOUNDING_NOTE = (
    "Acute medication use differs between groups; this may influence "
    "the observed pain pattern."
)


def detect_confounding(buckets: Sequence[BucketResult]) -> str | None:
    """Return the confounding note if acute-medication rates diverge.

    Conditions (all required):
      1. at least two buckets with ``n_days >= MIN_DAYS_PER_BUCKET``;
      2. at least one bucket with ``n_days >= MIN_DAYS_CONFOUNDING_HINT``;
      3. max − min ``acute_med_rate`` among the qualifying buckets exceeds
         ``CONFOUNDING_RATE_SPREAD``.

    Args:
        buckets: All buckets of one dimension.

    Returns:
        Note text, or None.
    """
    qualifying = [b for b in buckets if b.n_days >= MIN_DAYS_PER_BUCKET]
    if len(qualifying) < 2:
        return None
    if not any(b.n_days >= MIN_DAYS_CONFOUNDING_HINT for b in buckets):
        return None

    rates = [b.acute_med_rate for b in qualifying]
    # Compare at the precision the rates are stored with
    spread = round2(max(rates) - min(rates))
    if spread > CONFOUNDING_RATE_SPREAD:
        logger.debug("Acute medication rate spread %.2f across %d buckets", spread, len(rates))
        return CONFOUNDING_NOTE
    return None
