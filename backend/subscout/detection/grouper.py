"""Buckets transactions into merchant cohorts by normalized name key."""

import logging
import re
from typing import Dict, Iterable, List, Optional, Sequence

from subscout.detection.records import MerchantCohort, TransactionRecord
from subscout.detection.thresholds import DetectionThresholds, DEFAULT_THRESHOLDS

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


def normalize_merchant_key(name: Optional[str]) -> str:
    """Lowercase, trim and collapse internal whitespace."""
    if not name:
        return ""
    return _WHITESPACE.sub(" ", name.strip().lower())


def merchant_key(merchant_name: Optional[str], raw_name: Optional[str]) -> str:
    """MerchantKey of a charge: the cleaned merchant name, else the raw description."""
    return normalize_merchant_key(merchant_name or raw_name)


def merchant_key_for(txn: TransactionRecord) -> str:
    return merchant_key(txn.merchant_name, txn.raw_name)


def is_stoplisted(key: str, stoplist: Sequence[str]) -> bool:
    """True if any stoplist term appears in the key as a whole word, plural allowed.

    "fee" hits "late fees" but not "coffee" or "feedly"; "atm" hits
    "atm withdrawal" but not "atmos energy".
    """
    for term in stoplist:
        if re.search(r"\b" + re.escape(term.lower()) + r"s?\b", key):
            return True
    return False


def group_by_merchant(
    transactions: Iterable[TransactionRecord],
    thresholds: DetectionThresholds = DEFAULT_THRESHOLDS,
) -> Dict[str, MerchantCohort]:
    """
    Build one cohort per MerchantKey, transactions ascending by date.

    Inflows, too-short keys and stoplisted keys never make it into a cohort.
    Equal dates keep their input order.
    """
    buckets: Dict[str, List[TransactionRecord]] = {}
    skipped = 0

    for txn in transactions:
        if txn.amount <= 0:
            skipped += 1
            continue

        key = merchant_key_for(txn)
        if len(key) < thresholds.min_key_length or is_stoplisted(key, thresholds.stoplist):
            skipped += 1
            continue

        buckets.setdefault(key, []).append(txn)

    cohorts = {
        key: MerchantCohort(key=key, transactions=tuple(sorted(txns, key=lambda t: t.date)))
        for key, txns in buckets.items()
    }
    logger.debug(f"Grouped transactions into {len(cohorts)} cohorts ({skipped} skipped)")
    return cohorts
