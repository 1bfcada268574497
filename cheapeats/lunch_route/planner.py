from __future__ import annotations

import logging
from collections.abc import Iterable

from ..ranking.clock import Clock, resolve_clock
from ..ranking.config import DEFAULT_RANKING_CONFIG, RankingConfig
from ..ranking.filters import apply_hard_filters
from ..ranking.models import FilterState, RankedRestaurant, Restaurant
from ..ranking.reasons import generate_reasons
from ..ranking.scoring import is_lunch_hour, rank, walking_time_minutes
from .models import RouteCandidate, RoutePlan, RouteStart, RouteStartKind

logger = logging.getLogger(__name__)


class LunchRouteError(ValueError):
    """No plan could be built; the message is suitable for display."""


def is_lunch_time(
    clock: Clock | None = None, config: RankingConfig = DEFAULT_RANKING_CONFIG,
) -> bool:
    return is_lunch_hour(resolve_clock(clock).now().hour, config)


def _eta_minutes(
    restaurant: Restaurant, start: RouteStart, config: RankingConfig,
) -> int:
    if (
        start.kind is RouteStartKind.station
        and restaurant.transit_walk_minutes is not None
        and restaurant.nearest_station
        and start.station_name
        and restaurant.nearest_station.lower() == start.station_name.lower()
    ):
        return restaurant.transit_walk_minutes
    return walking_time_minutes(restaurant.distance_meters, config)


def _build_candidate(
    ranked: RankedRestaurant,
    start: RouteStart,
    filter_state: FilterState,
    config: RankingConfig,
) -> RouteCandidate:
    restaurant = ranked.restaurant
    return RouteCandidate(
        restaurant=restaurant,
        reasons=generate_reasons(restaurant, filter_state, config=config),
        eta_minutes=_eta_minutes(restaurant, start, config),
        walk_from_station=restaurant.transit_walk_minutes,
        nearest_station=restaurant.nearest_station,
        score=ranked.score,
        explanation=ranked.explanation,
    )


def plan_lunch_route(
    restaurants: Iterable[Restaurant],
    filter_state: FilterState,
    start: RouteStart,
    *,
    clock: Clock | None = None,
    config: RankingConfig = DEFAULT_RANKING_CONFIG,
    is_from_cache: bool = False,
) -> RoutePlan:
    """Pick a primary restaurant and a backup for a lunch outing.

    Hard filters from *filter_state* are enforced, then the survivors are
    ranked (lunch weights apply automatically during lunch hours).  The top
    two become the primary and backup picks.

    Raises ``LunchRouteError`` when nothing is available, nothing passes the
    filters, or nothing is open.
    """
    clock = resolve_clock(clock)
    candidates = list(restaurants)
    if not candidates:
        raise LunchRouteError(
            "No cached restaurants available" if is_from_cache else "No restaurants available"
        )

    hard_filters = filter_state.to_hard_filters()
    filtered = apply_hard_filters(candidates, hard_filters, config)
    if not filtered:
        raise LunchRouteError("No restaurants match your filters")

    ranked = rank(
        filtered,
        exclude_closed=True,
        require_under_15=hard_filters.strict_under_15,
        clock=clock,
        config=config,
    )
    if not ranked:
        raise LunchRouteError("No open restaurants found")

    primary = _build_candidate(ranked[0], start, filter_state, config)
    backup = (
        _build_candidate(ranked[1], start, filter_state, config) if len(ranked) > 1 else None
    )
    logger.info(
        "Lunch route from %s: primary=%s backup=%s",
        start.display_name,
        primary.restaurant.id,
        backup.restaurant.id if backup else None,
    )

    return RoutePlan(
        primary=primary,
        backup=backup,
        start=start,
        generated_at=clock.now(),
        is_from_cache=is_from_cache,
    )
