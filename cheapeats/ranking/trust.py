"""
Trust model for restaurant data.

Two coarse classifications travel with every record:

* ``PriceSource`` says where the numeric price estimate came from, in
  descending trust: provider API, user report, estimate derived from the
  price tier, or nothing at all.
* ``DataFreshness`` classifies the whole record: live from the provider,
  recently fetched, served from cache, or of unknown age.

Both map to short display labels.  The unknown price source maps to an
empty label.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum


class PriceSource(str, Enum):
    VERIFIED = "verified"
    USER_REPORTED = "user_reported"
    ESTIMATED = "estimated"
    UNKNOWN = "unknown"

    @property
    def label(self) -> str:
        return _PRICE_SOURCE_LABELS[self]


_PRICE_SOURCE_LABELS: dict[PriceSource, str] = {
    PriceSource.VERIFIED: "Verified",
    PriceSource.USER_REPORTED: "Reported",
    PriceSource.ESTIMATED: "Estimated",
    PriceSource.UNKNOWN: "",
}


class DataFreshness(str, Enum):
    LIVE = "live"  # from the provider, under 5 minutes old
    RECENT = "recent"  # under an hour old
    CACHED = "cached"  # over an hour old
    UNKNOWN = "unknown"  # no timestamp available

    @property
    def label(self) -> str:
        return _FRESHNESS_LABELS[self]


_FRESHNESS_LABELS: dict[DataFreshness, str] = {
    DataFreshness.LIVE: "Live data",
    DataFreshness.RECENT: "Updated recently",
    DataFreshness.CACHED: "Cached",
    DataFreshness.UNKNOWN: "Unverified",
}


def _hours_between(earlier: datetime, later: datetime) -> int:
    # Mixed naive/aware values are compared in local time.
    if earlier.tzinfo is None and later.tzinfo is not None:
        earlier = earlier.astimezone()
    elif earlier.tzinfo is not None and later.tzinfo is None:
        later = later.astimezone()
    return int((later - earlier).total_seconds() // 3600)


def trust_label(
    freshness: DataFreshness,
    last_verified: datetime | None,
    now: datetime,
) -> str:
    """Return the user-facing trust label for a record.

    Cached records with a verification timestamp get an age suffix
    ("Cached 5h ago", "Cached 2d ago"); everything else uses the fixed label.
    """
    if freshness is not DataFreshness.CACHED or last_verified is None:
        return freshness.label

    hours_ago = _hours_between(last_verified, now)
    if hours_ago < 1:
        return DataFreshness.RECENT.label
    if hours_ago < 24:
        return f"Cached {hours_ago}h ago"
    return f"Cached {hours_ago // 24}d ago"
