from __future__ import annotations

import logging
from collections.abc import Iterable
from enum import Enum

from .clock import Clock, resolve_clock
from .config import DEFAULT_RANKING_CONFIG, RankingConfig
from .filters import apply_filters, apply_hard_filters
from .models import FilterState, RankedRestaurant, Restaurant, SortOption
from .reasons import generate_explanation, generate_reasons
from .scoring import rank, sort_key

logger = logging.getLogger(__name__)


class ExplanationStrategy(str, Enum):
    CANNED = "canned"  # scoring engine's casual one-liner
    REASONS = "reasons"  # rendered from the reason tags


def recommend(
    restaurants: Iterable[Restaurant],
    filter_state: FilterState | None = None,
    search_query: str | None = None,
    explanation: ExplanationStrategy = ExplanationStrategy.REASONS,
    *,
    clock: Clock | None = None,
    config: RankingConfig = DEFAULT_RANKING_CONFIG,
) -> list[RankedRestaurant]:
    """Filter, then score, then explain.

    Hard filters derived from *filter_state* run first and can never be
    relaxed by scoring; the remaining filter-bar toggles (student discount,
    flexible price ceiling) narrow the survivors further.  Every returned
    item carries its reason tags; the explanation string comes from the
    chosen *explanation* strategy.  A non-default ``sort_by`` reorders the
    ranked items without rescoring.
    """
    filter_state = filter_state or FilterState()
    clock = resolve_clock(clock)
    hard_filters = filter_state.to_hard_filters()

    candidates = list(restaurants)
    admitted = apply_filters(
        apply_hard_filters(candidates, hard_filters, config), filter_state, config,
    )
    ranked = rank(
        admitted,
        exclude_closed=True,
        require_under_15=hard_filters.strict_under_15,
        clock=clock,
        config=config,
    )
    logger.debug(
        "recommend: %d candidates, %d admitted, %d ranked",
        len(candidates),
        len(admitted),
        len(ranked),
    )

    results: list[RankedRestaurant] = []
    for item in ranked:
        reasons = generate_reasons(item.restaurant, filter_state, search_query, config)
        text = (
            generate_explanation(reasons)
            if explanation is ExplanationStrategy.REASONS
            else item.explanation
        )
        results.append(
            RankedRestaurant(
                restaurant=item.restaurant,
                score=item.score,
                reasons=reasons,
                explanation=text,
                trust_label=item.trust_label,
            )
        )

    if filter_state.sort_by is not SortOption.RECOMMENDED:
        key = sort_key(filter_state.sort_by)
        results.sort(key=lambda item: key(item.restaurant))

    return results
