from __future__ import annotations

from .config import DEFAULT_RANKING_CONFIG, RankingConfig
from .models import FilterState, RankedRestaurant, RecommendationReason, Restaurant
from .trust import PriceSource

_FALLBACK_EXPLANATION = "Nearby option"
_EXPLANATION_REASONS = 2

_REASON_PHRASES: dict[RecommendationReason, str] = {
    RecommendationReason.OPEN_NOW: "open now",
    RecommendationReason.VERIFIED_UNDER_15: "verified cheap",
    RecommendationReason.ESTIMATED_UNDER_15: "likely affordable",
    RecommendationReason.NEAR_TRANSIT: "steps from transit",
    RecommendationReason.HIGH_RATING: "locals love it",
    RecommendationReason.QUERY_MATCH: "matches your search",
    RecommendationReason.STUDENT_DISCOUNT: "student discount",
    RecommendationReason.QUICK_SERVICE: "quick service",
    RecommendationReason.LUNCH_SPECIAL: "lunch special",
    RecommendationReason.FASTEST_OPTION: "fastest lunch",
}


def _matches_query(restaurant: Restaurant, search_query: str | None) -> bool:
    if not search_query or not search_query.strip():
        return False
    needle = search_query.lower()
    return needle in restaurant.name.lower() or needle in restaurant.cuisine.lower()


def generate_reasons(
    restaurant: Restaurant,
    filter_state: FilterState,
    search_query: str | None = None,
    config: RankingConfig = DEFAULT_RANKING_CONFIG,
) -> list[RecommendationReason]:
    """Return up to four "why this pick" tags in fixed priority order.

    *filter_state* is the caller's active filter context; it is accepted so
    every reason source shares one signature, but none of the current tags
    depend on it.
    """
    reasons: list[RecommendationReason] = []

    if restaurant.is_open_now is True:
        reasons.append(RecommendationReason.OPEN_NOW)

    if restaurant.is_verified_under(config.price_threshold):
        reasons.append(RecommendationReason.VERIFIED_UNDER_15)
    elif (
        restaurant.price_source is PriceSource.ESTIMATED
        and restaurant.is_under(config.price_threshold)
    ):
        reasons.append(RecommendationReason.ESTIMATED_UNDER_15)

    walk = restaurant.transit_walk_minutes
    if restaurant.near_transit and walk is not None and walk <= config.near_transit_reason_minutes:
        reasons.append(RecommendationReason.NEAR_TRANSIT)

    if restaurant.rating >= config.high_rating_threshold:
        reasons.append(RecommendationReason.HIGH_RATING)

    if _matches_query(restaurant, search_query):
        reasons.append(RecommendationReason.QUERY_MATCH)

    if restaurant.has_student_discount:
        reasons.append(RecommendationReason.STUDENT_DISCOUNT)

    return reasons[: config.max_reasons]


def generate_explanation(reasons: list[RecommendationReason]) -> str:
    """Render the first two reasons as one short sentence fragment."""
    if not reasons:
        return _FALLBACK_EXPLANATION

    text = ", ".join(_REASON_PHRASES[r] for r in reasons[:_EXPLANATION_REASONS])
    return text[:1].upper() + text[1:]


def rank_with_reasons(
    restaurant: Restaurant,
    score: float,
    filter_state: FilterState,
    search_query: str | None = None,
) -> RankedRestaurant:
    reasons = generate_reasons(restaurant, filter_state, search_query)
    return RankedRestaurant(
        restaurant=restaurant,
        score=score,
        reasons=reasons,
        explanation=generate_explanation(reasons),
    )
