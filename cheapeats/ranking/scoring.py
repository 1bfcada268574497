from __future__ import annotations

import logging
import math
from collections.abc import Callable, Iterable, Sequence
from typing import Any

from .clock import Clock, resolve_clock
from .config import DEFAULT_RANKING_CONFIG, RankingConfig, ScoringWeights
from .models import RankedRestaurant, Restaurant, SortOption
from .trust import DataFreshness, trust_label

logger = logging.getLogger(__name__)


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


# ---------------------------------------------------------------------------
# Time-of-day weights
# ---------------------------------------------------------------------------


def is_lunch_hour(hour: int, config: RankingConfig = DEFAULT_RANKING_CONFIG) -> bool:
    return config.lunch_start_hour <= hour <= config.lunch_end_hour


def weights_for_hour(
    hour: int, config: RankingConfig = DEFAULT_RANKING_CONFIG,
) -> ScoringWeights:
    """Return the weight triple in effect at *hour* (0-23)."""
    if is_lunch_hour(hour, config):
        return config.lunch_weights
    return config.default_weights


# ---------------------------------------------------------------------------
# Per-restaurant scoring
# ---------------------------------------------------------------------------


def value_score(restaurant: Restaurant, config: RankingConfig = DEFAULT_RANKING_CONFIG) -> float:
    """1.0 for a free meal, 0.0 at or above the price threshold."""
    if restaurant.average_price is None:
        return config.neutral_score
    threshold = config.price_threshold
    return _clamp((threshold - restaurant.average_price) / threshold)


def transit_score(restaurant: Restaurant, config: RankingConfig = DEFAULT_RANKING_CONFIG) -> float:
    """1.0 at the station door, 0.0 at ten or more minutes' walk."""
    if restaurant.transit_walk_minutes is None:
        return config.neutral_score
    return _clamp(1.0 - restaurant.transit_walk_minutes / config.transit_horizon_minutes)


def rating_score(restaurant: Restaurant) -> float:
    return restaurant.rating / 5.0


def composite_score(
    restaurant: Restaurant,
    weights: ScoringWeights,
    config: RankingConfig = DEFAULT_RANKING_CONFIG,
) -> float:
    return (
        value_score(restaurant, config) * weights.value
        + transit_score(restaurant, config) * weights.transit
        + rating_score(restaurant) * weights.rating
    )


def is_boost_eligible(
    restaurant: Restaurant, config: RankingConfig = DEFAULT_RANKING_CONFIG,
) -> bool:
    """Favorites are boosted only when not known closed and not clearly overpriced."""
    return (
        restaurant.is_favorite
        and restaurant.is_open_now is not False
        and restaurant.is_flexibly_under(config.price_threshold)
    )


def score_restaurant(
    restaurant: Restaurant,
    weights: ScoringWeights,
    config: RankingConfig = DEFAULT_RANKING_CONFIG,
) -> float:
    """Composite score with the favorite boost applied when eligible."""
    score = composite_score(restaurant, weights, config)
    if is_boost_eligible(restaurant, config):
        score *= config.favorite_boost
    return score


# ---------------------------------------------------------------------------
# Canned explanation
# ---------------------------------------------------------------------------


def generate_short_explanation(
    restaurant: Restaurant, config: RankingConfig = DEFAULT_RANKING_CONFIG,
) -> str:
    """Casual one-liner built from price, transit, rating and open status."""
    parts: list[str] = []

    if (
        restaurant.average_price is not None
        and restaurant.average_price < config.stupid_cheap_price
    ):
        parts.append("Stupid cheap")
    elif restaurant.is_under(config.price_threshold):
        parts.append("Budget-friendly")

    station = restaurant.nearest_station
    if station:
        walk = restaurant.transit_walk_minutes
        if walk is not None and walk <= config.near_transit_reason_minutes:
            parts.append(f"steps from {station}")
        elif restaurant.near_transit:
            parts.append(f"near {station}")

    if restaurant.rating >= 4.5:
        parts.append("locals love it")
    elif restaurant.rating >= 4.0:
        parts.append(f"solid {restaurant.rating} stars")
    elif restaurant.rating >= 3.5:
        parts.append("decent spot")

    if restaurant.is_open_now is True:
        parts.append("open now")

    if not parts:
        parts.append(restaurant.cuisine.lower())

    return ", ".join(parts)[: config.explanation_max_chars]


# ---------------------------------------------------------------------------
# Ranking
# ---------------------------------------------------------------------------


def apply_trust_invariant(
    scored: Sequence[tuple[Restaurant, float]],
) -> list[tuple[Restaurant, float]]:
    """Keep an unverified record out of first place when a verified one exists.

    If the top entry has UNKNOWN freshness, it swaps places with the first
    entry that does not.  Returns a new list; the input is left untouched.
    """
    ordered = list(scored)
    if not ordered or ordered[0][0].data_freshness is not DataFreshness.UNKNOWN:
        return ordered

    for idx in range(1, len(ordered)):
        if ordered[idx][0].data_freshness is not DataFreshness.UNKNOWN:
            logger.debug(
                "Trust swap: %s (unverified) <-> %s",
                ordered[0][0].id,
                ordered[idx][0].id,
            )
            return [ordered[idx], *ordered[1:idx], ordered[0], *ordered[idx + 1 :]]
    return ordered


def rank(
    restaurants: Iterable[Restaurant],
    exclude_closed: bool = True,
    require_under_15: bool = False,
    *,
    clock: Clock | None = None,
    config: RankingConfig = DEFAULT_RANKING_CONFIG,
) -> list[RankedRestaurant]:
    """Score and order restaurants, best first.

    Steps:
    - Drop restaurants known to be closed (unknown status is kept) and,
      when asked, those priced at $15 or more (unknown price is kept).
    - Score each by value, transit and rating with the weights for the
      current hour, boosting eligible favorites.
    - Sort by score descending; equal scores fall back to id order.
    - Never put an unverified record first when a verified one exists.
    """
    candidates = list(restaurants)
    if exclude_closed:
        candidates = [r for r in candidates if r.is_open_now is not False]
    if require_under_15:
        candidates = [r for r in candidates if r.is_flexibly_under(config.price_threshold)]
    if not candidates:
        return []

    now = resolve_clock(clock).now()
    weights = weights_for_hour(now.hour, config)
    logger.debug("Ranking %d restaurants at hour %d with %s", len(candidates), now.hour, weights)

    scored = [(r, score_restaurant(r, weights, config)) for r in candidates]
    scored.sort(key=lambda pair: (-pair[1], pair[0].id))
    scored = apply_trust_invariant(scored)

    return [
        RankedRestaurant(
            restaurant=r,
            score=score,
            explanation=generate_short_explanation(r, config),
            trust_label=trust_label(r.data_freshness, r.last_verified, now),
        )
        for r, score in scored
    ]


# ---------------------------------------------------------------------------
# List helpers
# ---------------------------------------------------------------------------


def filter_open(restaurants: Iterable[Restaurant]) -> list[Restaurant]:
    """Drop restaurants known to be closed; unknown status is kept."""
    return [r for r in restaurants if r.is_open_now is not False]


def filter_under_15(
    restaurants: Iterable[Restaurant], config: RankingConfig = DEFAULT_RANKING_CONFIG,
) -> list[Restaurant]:
    """Keep restaurants under the price threshold, or with no known price."""
    return [r for r in restaurants if r.is_flexibly_under(config.price_threshold)]


_SORT_KEYS: dict[SortOption, Callable[[Restaurant], Any]] = {
    SortOption.PRICE_LOW: lambda r: (
        r.average_price if r.average_price is not None else math.inf
    ),
    SortOption.RATING_HIGH: lambda r: -r.rating,
    SortOption.NEAREST_TRANSIT: lambda r: (
        r.transit_walk_minutes if r.transit_walk_minutes is not None else math.inf
    ),
}


def sort_key(option: SortOption) -> Callable[[Restaurant], Any]:
    """Ascending sort key for a non-score sort option."""
    if option is SortOption.RECOMMENDED:
        raise ValueError("RECOMMENDED ordering comes from rank(), not a key")
    return _SORT_KEYS[option]


def sort_by(
    restaurants: Iterable[Restaurant],
    option: SortOption,
    *,
    clock: Clock | None = None,
    config: RankingConfig = DEFAULT_RANKING_CONFIG,
) -> list[Restaurant]:
    """Order restaurants by *option*; unknown prices and walk times sort last."""
    if option is SortOption.RECOMMENDED:
        return [ranked.restaurant for ranked in rank(restaurants, clock=clock, config=config)]
    return sorted(restaurants, key=sort_key(option))


def walking_time_minutes(
    distance_meters: float, config: RankingConfig = DEFAULT_RANKING_CONFIG,
) -> int:
    """Whole minutes to walk *distance_meters* at average pace."""
    return math.floor(distance_meters / config.walking_speed_m_per_min)
