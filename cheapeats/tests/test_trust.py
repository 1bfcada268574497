from __future__ import annotations

from datetime import datetime, timedelta, timezone

from cheapeats.ranking.trust import DataFreshness, PriceSource, trust_label

NOW = datetime(2026, 10, 19, 9, 0)


def test_price_source_labels():
    assert PriceSource.VERIFIED.label == "Verified"
    assert PriceSource.USER_REPORTED.label == "Reported"
    assert PriceSource.ESTIMATED.label == "Estimated"
    assert PriceSource.UNKNOWN.label == ""


def test_freshness_labels():
    assert DataFreshness.LIVE.label == "Live data"
    assert DataFreshness.RECENT.label == "Updated recently"
    assert DataFreshness.CACHED.label == "Cached"
    assert DataFreshness.UNKNOWN.label == "Unverified"


def test_enums_round_trip_from_strings():
    assert PriceSource("estimated") is PriceSource.ESTIMATED
    assert DataFreshness("cached") is DataFreshness.CACHED


class TestTrustLabel:
    def test_live_ignores_timestamp(self):
        assert trust_label(DataFreshness.LIVE, NOW - timedelta(days=3), NOW) == "Live data"

    def test_unknown_is_unverified(self):
        assert trust_label(DataFreshness.UNKNOWN, None, NOW) == "Unverified"

    def test_cached_without_timestamp(self):
        assert trust_label(DataFreshness.CACHED, None, NOW) == "Cached"

    def test_cached_under_an_hour_reads_as_recent(self):
        label = trust_label(DataFreshness.CACHED, NOW - timedelta(minutes=30), NOW)
        assert label == "Updated recently"

    def test_cached_hours_ago(self):
        label = trust_label(DataFreshness.CACHED, NOW - timedelta(hours=5, minutes=59), NOW)
        assert label == "Cached 5h ago"

    def test_cached_days_ago(self):
        label = trust_label(DataFreshness.CACHED, NOW - timedelta(hours=50), NOW)
        assert label == "Cached 2d ago"

    def test_cached_aware_timestamps(self):
        now = datetime(2026, 10, 19, 9, 0, tzinfo=timezone.utc)
        label = trust_label(DataFreshness.CACHED, now - timedelta(hours=3), now)
        assert label == "Cached 3h ago"
