"""Applies user corrections and soft deletions on top of merged candidates."""

from typing import Dict, Iterable, List, Optional

from subscout.detection.records import CandidateSubscription, FinalSubscriptionView, OverrideRecord


def apply_override(
    candidate: CandidateSubscription,
    override: Optional[OverrideRecord] = None,
) -> FinalSubscriptionView:
    """Overlay the set custom fields; unset fields keep their detected value."""
    fields = candidate.model_dump()
    modified = False

    if override is not None:
        if override.custom_name is not None:
            fields["display_name"] = override.custom_name
            modified = True
        if override.custom_amount is not None:
            fields["amount"] = override.custom_amount
            modified = True
        if override.custom_frequency is not None:
            fields["frequency"] = override.custom_frequency
            modified = True

    return FinalSubscriptionView(
        **fields,
        subscription_key=candidate.merchant_key,
        is_user_modified=modified,
    )


def apply_overrides(
    candidates: Iterable[CandidateSubscription],
    overrides: Iterable[OverrideRecord],
) -> List[FinalSubscriptionView]:
    """Drop user-deleted merchants and apply edits to the rest."""
    by_key: Dict[str, OverrideRecord] = {o.merchant_key: o for o in overrides}

    views = []
    for candidate in candidates:
        override = by_key.get(candidate.merchant_key)
        if override is not None and override.is_deleted:
            continue
        views.append(apply_override(candidate, override))
    return views
