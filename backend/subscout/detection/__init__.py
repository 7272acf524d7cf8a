"""
Recurring-charge detection engine.
"""

from subscout.detection.records import (
    Frequency,
    Origin,
    TransactionRecord,
    CandidateSubscription,
    OverrideRecord,
    FinalSubscriptionView,
    DetectionResult,
)
from subscout.detection.thresholds import DetectionThresholds, DEFAULT_THRESHOLDS
from subscout.detection.grouper import merchant_key, normalize_merchant_key
from subscout.detection.pipeline import (
    detect_candidates,
    detect_imported_candidates,
    detect_synced_candidates,
    run_detection,
)

__all__ = [
    "Frequency",
    "Origin",
    "TransactionRecord",
    "CandidateSubscription",
    "OverrideRecord",
    "FinalSubscriptionView",
    "DetectionResult",
    "DetectionThresholds",
    "DEFAULT_THRESHOLDS",
    "merchant_key",
    "normalize_merchant_key",
    "detect_candidates",
    "detect_imported_candidates",
    "detect_synced_candidates",
    "run_detection",
]
