"""
Reconciliation of candidates found independently by the import and sync pipelines.
"""

import logging
from typing import Dict, Iterable, List

from subscout.detection.records import CandidateSubscription, Origin

logger = logging.getLogger(__name__)


def _by_key(candidates: Iterable[CandidateSubscription]) -> Dict[str, CandidateSubscription]:
    return {c.merchant_key: c for c in candidates}


def merge_candidates(
    imported: Iterable[CandidateSubscription],
    synced: Iterable[CandidateSubscription],
) -> List[CandidateSubscription]:
    """
    Produce at most one candidate per MerchantKey.

    A key seen by one source passes through untouched. A key seen by both
    keeps the candidate with more transactions, retagged as merged; an
    exact tie keeps the imported one.

    Output order: imported keys in their order, then sync-only keys.
    """
    imported_by_key = _by_key(imported)
    synced_by_key = _by_key(synced)

    merged: Dict[str, CandidateSubscription] = {}
    reconciled = 0

    for key, candidate in imported_by_key.items():
        other = synced_by_key.get(key)
        if other is None:
            merged[key] = candidate
            continue

        winner = other if other.transaction_count > candidate.transaction_count else candidate
        merged[key] = winner.model_copy(update={"origin": Origin.merged})
        reconciled += 1

    for key, candidate in synced_by_key.items():
        if key not in merged:
            merged[key] = candidate

    logger.debug(
        f"Merged {len(imported_by_key)} imported and {len(synced_by_key)} synced candidates "
        f"into {len(merged)} ({reconciled} reconciled)"
    )
    return list(merged.values())
