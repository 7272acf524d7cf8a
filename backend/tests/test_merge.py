"""Tests for reconciling import and sync candidates."""

from datetime import date
from decimal import Decimal

from subscout.detection.merge import merge_candidates
from subscout.detection.records import CandidateSubscription, ChargeRecord, Frequency, Origin


def candidate(key, count, origin, account_hint=None, last_charge=date(2024, 5, 1)):
    return CandidateSubscription(
        merchant_key=key,
        display_name=key.title(),
        amount=Decimal("15.99"),
        frequency=Frequency.monthly,
        confidence=0.95,
        last_charge=last_charge,
        account_hint=account_hint,
        transaction_count=count,
        history=tuple(ChargeRecord(amount=Decimal("15.99"), date=last_charge) for _ in range(count)),
        origin=origin,
    )


class TestMergeCandidates:
    """Test source reconciliation."""

    def test_single_source_entries_unchanged(self):
        imported = candidate("hulu", 3, Origin.imported_file)
        synced = candidate("spotify", 5, Origin.sync_feed)

        merged = merge_candidates([imported], [synced])

        assert merged == [imported, synced]

    def test_larger_transaction_count_wins(self):
        """Netflix with 4 imported and 6 synced charges keeps the synced one."""
        imported = candidate("netflix", 4, Origin.imported_file, account_hint="Statement")
        synced = candidate("netflix", 6, Origin.sync_feed, account_hint="Checking ••4821")

        merged = merge_candidates([imported], [synced])

        assert len(merged) == 1
        assert merged[0].transaction_count == 6
        assert merged[0].account_hint == "Checking ••4821"
        assert merged[0].origin == Origin.merged

    def test_imported_wins_when_larger(self):
        imported = candidate("netflix", 7, Origin.imported_file, account_hint="Statement")
        synced = candidate("netflix", 2, Origin.sync_feed, account_hint="Checking ••4821")

        merged = merge_candidates([imported], [synced])

        assert merged[0].account_hint == "Statement"
        assert merged[0].origin == Origin.merged

    def test_tie_prefers_imported(self):
        imported = candidate("netflix", 5, Origin.imported_file, account_hint="Statement")
        synced = candidate("netflix", 5, Origin.sync_feed, account_hint="Checking ••4821")

        merged = merge_candidates([imported], [synced])

        assert merged[0].account_hint == "Statement"
        assert merged[0].origin == Origin.merged

    def test_inputs_not_mutated(self):
        imported = candidate("netflix", 4, Origin.imported_file)
        synced = candidate("netflix", 6, Origin.sync_feed)

        merge_candidates([imported], [synced])

        assert synced.origin == Origin.sync_feed

    def test_one_entry_per_key(self):
        imported = [candidate("netflix", 4, Origin.imported_file), candidate("hulu", 2, Origin.imported_file)]
        synced = [candidate("netflix", 6, Origin.sync_feed), candidate("gym", 3, Origin.sync_feed)]

        merged = merge_candidates(imported, synced)

        assert sorted(c.merchant_key for c in merged) == ["gym", "hulu", "netflix"]
        by_key = {c.merchant_key: c for c in merged}
        assert by_key["netflix"].transaction_count == 6

    def test_empty_sources(self):
        assert merge_candidates([], []) == []
