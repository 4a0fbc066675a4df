"""Relative risk between a reference bucket and a comparison bucket.

Both buckets must hold at least ``MIN_DAYS_PER_BUCKET`` days, otherwise no
comparison is reported at all.  When the reference rate is zero the ratio is
undefined and ``rr`` is None, but the absolute difference is still given.
"""

from __future__ import annotations

import logging
from typing import Sequence

from symptom_diary.weather.base import BucketResult, RelativeRiskResult
from symptom_diary.weather.constants import MIN_DAYS_PER_BUCKET
from symptom_diary.weather.stats import round2

logger = logging.getLogger("symptom_diary.weather.relative_risk")


def compute_relative_risk(
    reference: BucketResult,
    compare: BucketResult,
) -> RelativeRiskResult | None:
    if reference.n_days < MIN_DAYS_PER_BUCKET or compare.n_days < MIN_DAYS_PER_BUCKET:
        return None

    abs_diff = round2(compare.headache_rate - reference.headache_rate)
    if reference.headache_rate == 0:
        rr = None
    else:
        rr = round2(compare.headache_rate / reference.headache_rate)

    return RelativeRiskResult(
        reference_label=reference.label,
        compare_label=compare.label,
        rr=rr,
        abs_diff=abs_diff,
    )


def select_comparison_bucket(candidates: Sequence[BucketResult]) -> BucketResult | None:
    """Pick the largest candidate bucket that meets the per-bucket minimum.

    Candidates are given most extreme first; on a tie in size the earlier
    (more extreme) bucket wins.

    Args:
        candidates: Non-reference buckets, most extreme first.

    Returns:
        The chosen bucket, or None if none qualifies.
    """
    best: BucketResult | None = None
    for bucket in candidates:
        if bucket.n_days < MIN_DAYS_PER_BUCKET:
            continue
        if best is None or bucket.n_days > best.n_days:
            best = bucket
    return best


def compare_against_reference(
    reference: BucketResult,
    candidates: Sequence[BucketResult],
) -> RelativeRiskResult | None:
    """Select a comparison bucket and compute its relative risk vs the reference."""
    compare = select_comparison_bucket(candidates)
    if compare is None:
        logger.debug("No comparison bucket with >= %d days", MIN_DAYS_PER_BUCKET)
        return None
    return compute_relative_risk(reference, compare)
