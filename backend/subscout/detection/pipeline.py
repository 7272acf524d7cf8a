"""
End-to-end recurring-charge detection for one user's snapshot.

Each source runs grouping, classification and candidate building on its
own records. The two candidate sets are then merged, user overrides are
applied, and the result is aggregated. Nothing here reads ambient state:
the caller passes the records, the overrides, the thresholds and "today".
"""

import logging
from datetime import date
from typing import Iterable, List, Optional

from subscout.detection.aggregator import aggregate
from subscout.detection.candidates import build_candidate
from subscout.detection.classifier import classify_cohort
from subscout.detection.grouper import group_by_merchant
from subscout.detection.merge import merge_candidates
from subscout.detection.overrides import apply_overrides
from subscout.detection.records import (
    CandidateSubscription,
    DetectionResult,
    Origin,
    OverrideRecord,
    TransactionRecord,
)
from subscout.detection.thresholds import DetectionThresholds, DEFAULT_THRESHOLDS

logger = logging.getLogger(__name__)


def detect_candidates(
    records: Iterable[TransactionRecord],
    origin: Origin,
    thresholds: DetectionThresholds = DEFAULT_THRESHOLDS,
    as_of: Optional[date] = None,
) -> List[CandidateSubscription]:
    """Group, classify and build candidates for a single source."""
    as_of = as_of or date.today()
    candidates = []

    for cohort in group_by_merchant(records, thresholds).values():
        classification = classify_cohort(cohort, thresholds)
        if classification is None:
            continue
        candidates.append(build_candidate(cohort, classification, origin, as_of))

    logger.debug(f"{origin.value}: {len(candidates)} candidate subscriptions")
    return candidates


def detect_imported_candidates(
    records: Iterable[TransactionRecord],
    thresholds: DetectionThresholds = DEFAULT_THRESHOLDS,
    as_of: Optional[date] = None,
) -> List[CandidateSubscription]:
    return detect_candidates(records, Origin.imported_file, thresholds, as_of)


def detect_synced_candidates(
    records: Iterable[TransactionRecord],
    thresholds: DetectionThresholds = DEFAULT_THRESHOLDS,
    as_of: Optional[date] = None,
) -> List[CandidateSubscription]:
    return detect_candidates(records, Origin.sync_feed, thresholds, as_of)


def run_detection(
    imported: Iterable[TransactionRecord],
    synced: Iterable[TransactionRecord],
    overrides: Iterable[OverrideRecord] = (),
    thresholds: Optional[DetectionThresholds] = None,
    as_of: Optional[date] = None,
) -> DetectionResult:
    """
    Full pipeline: both sources, merge, overrides, totals.

    Subscriptions come back newest last charge first, ties broken by key,
    so identical input always yields an identical list.
    """
    thresholds = thresholds or DEFAULT_THRESHOLDS
    as_of = as_of or date.today()

    merged = merge_candidates(
        detect_imported_candidates(imported, thresholds, as_of),
        detect_synced_candidates(synced, thresholds, as_of),
    )
    views = apply_overrides(merged, overrides)
    views.sort(key=lambda v: v.subscription_key)
    views.sort(key=lambda v: v.last_charge, reverse=True)

    totals = aggregate(views)
    return DetectionResult(
        subscriptions=views,
        monthly_equivalents=totals.monthly_equivalents,
        total_monthly=totals.total_monthly,
        count=len(views),
    )
