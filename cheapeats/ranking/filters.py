from __future__ import annotations

import logging
from collections.abc import Iterable

from .config import DEFAULT_RANKING_CONFIG, RankingConfig
from .models import FilterState, HardFilters, PriceFilterMode, Restaurant
from .trust import PriceSource

logger = logging.getLogger(__name__)

_STRICT_SOURCES = {PriceSource.VERIFIED, PriceSource.UNKNOWN}


# ---------------------------------------------------------------------------
# Hard filters
# ---------------------------------------------------------------------------


def admit(
    restaurant: Restaurant,
    filters: HardFilters,
    config: RankingConfig = DEFAULT_RANKING_CONFIG,
) -> Restaurant | None:
    """Return the restaurant if it satisfies every active hard filter, else ``None``.

    Hard filters are a closed gate evaluated before scoring.  Unknown values
    never pass: an unknown open status is not "open", an estimated price is
    not a verified one, and a missing walk time is treated as infinitely long.
    """
    if filters.must_be_open and restaurant.is_open_now is not True:
        return None

    if filters.strict_under_15 and not restaurant.is_verified_under(config.price_threshold):
        return None

    if filters.must_be_near_transit and not restaurant.near_transit:
        return None

    if filters.max_walk_minutes is not None:
        walk = restaurant.transit_walk_minutes
        if walk is None or walk > filters.max_walk_minutes:
            return None

    return restaurant


def apply_hard_filters(
    restaurants: Iterable[Restaurant],
    filters: HardFilters,
    config: RankingConfig = DEFAULT_RANKING_CONFIG,
) -> list[Restaurant]:
    """Admit each restaurant in turn, preserving input order for survivors."""
    admitted = [r for r in restaurants if admit(r, filters, config) is not None]
    logger.debug("Hard filters %s admitted %d restaurants", filters, len(admitted))
    return admitted


# ---------------------------------------------------------------------------
# Price filter modes
# ---------------------------------------------------------------------------


def matches_price_filter(
    restaurant: Restaurant,
    mode: PriceFilterMode,
    config: RankingConfig = DEFAULT_RANKING_CONFIG,
) -> bool:
    """Check the "under $15" filter under the given strictness mode.

    Without a numeric price both modes fall back to the price tier.  Strict
    mode rejects estimated and user-reported prices outright; flexible mode
    lets them through up to the $17 ceiling.  Verified prices always use the
    $15 boundary.
    """
    price = restaurant.average_price
    if price is None:
        return restaurant.price_level <= 1

    if restaurant.price_source is PriceSource.VERIFIED:
        return price < config.price_threshold

    if mode is PriceFilterMode.STRICT:
        return restaurant.price_source in _STRICT_SOURCES and price < config.price_threshold

    return price <= config.flexible_price_ceiling


# ---------------------------------------------------------------------------
# Filter bar
# ---------------------------------------------------------------------------


def apply_filters(
    restaurants: Iterable[Restaurant],
    filter_state: FilterState,
    config: RankingConfig = DEFAULT_RANKING_CONFIG,
) -> list[Restaurant]:
    """Apply the filter bar toggles with AND logic.

    Unlike the hard filters, the open-now toggle here only drops restaurants
    known to be closed.
    """
    restaurants = list(restaurants)
    if not filter_state.has_active_filters:
        return restaurants

    def _matches(r: Restaurant) -> bool:
        if filter_state.under_15_active and not matches_price_filter(
            r, filter_state.price_filter_mode, config
        ):
            return False
        if filter_state.student_discount_active and not r.has_student_discount:
            return False
        if filter_state.near_transit_active and not r.near_transit:
            return False
        if filter_state.open_now_active and r.is_open_now is False:
            return False
        return True

    return [r for r in restaurants if _matches(r)]
