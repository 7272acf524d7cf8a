"""
Frequency classification for merchant cohorts.

Timing decides whether a cohort recurs and at what cadence. Amount
dispersion only lowers confidence: utility and usage-based bills recur
on schedule while their amounts swing, and they should still surface.
"""

import logging
from decimal import Decimal
from typing import List, Optional

from subscout.detection.records import AmountStats, Classification, MerchantCohort
from subscout.detection.thresholds import DetectionThresholds, DEFAULT_THRESHOLDS

logger = logging.getLogger(__name__)


def compute_amount_stats(cohort: MerchantCohort) -> AmountStats:
    amounts = [t.amount for t in cohort.transactions]
    average = sum(amounts, Decimal("0")) / len(amounts)
    minimum = min(amounts)
    maximum = max(amounts)
    variance = float((maximum - minimum) / average) if average != 0 else 0.0
    return AmountStats(average=average, minimum=minimum, maximum=maximum, variance=variance)


def day_gaps(cohort: MerchantCohort) -> List[int]:
    """Days between each consecutive pair of charges."""
    dates = [t.date for t in cohort.transactions]
    return [(later - earlier).days for earlier, later in zip(dates, dates[1:])]


def score_confidence(
    avg_deviation: float,
    expected_days: int,
    amount_variance: float,
    thresholds: DetectionThresholds,
) -> float:
    confidence = 1.0 - avg_deviation / expected_days
    if amount_variance > thresholds.high_amount_variance:
        confidence -= thresholds.amount_variance_penalty
    confidence = max(thresholds.confidence_floor, min(thresholds.confidence_ceiling, confidence))
    return round(confidence, 2)


def classify_cohort(
    cohort: MerchantCohort,
    thresholds: DetectionThresholds = DEFAULT_THRESHOLDS,
) -> Optional[Classification]:
    """
    Decide whether a cohort is a recurring charge.

    Returns None when the cohort is rejected: too few charges, an average
    interval outside every band, or a single gap drifting further from the
    band's expected interval than the band allows.
    """
    if len(cohort.transactions) < max(2, thresholds.min_transactions):
        return None

    stats = compute_amount_stats(cohort)
    gaps = day_gaps(cohort)
    avg_interval = sum(gaps) / len(gaps)

    band = thresholds.band_for(avg_interval)
    if band is None:
        logger.debug(f"Rejected {cohort.key!r}: average interval {avg_interval:.1f}d matches no cadence")
        return None

    deviations = [abs(gap - band.expected_days) for gap in gaps]
    if max(deviations) > band.max_gap_deviation:
        logger.debug(f"Rejected {cohort.key!r}: {band.frequency.value} gap drifted {max(deviations)}d")
        return None

    avg_deviation = sum(deviations) / len(deviations)
    confidence = score_confidence(avg_deviation, band.expected_days, stats.variance, thresholds)

    return Classification(
        frequency=band.frequency,
        expected_interval_days=band.expected_days,
        confidence=confidence,
        amount_stats=stats,
    )
