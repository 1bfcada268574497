from __future__ import annotations

from fastapi import Depends, FastAPI, HTTPException

from .api_models import (
    FilterRequest,
    LunchRouteRequest,
    RecommendationRequest,
    RecommendationResponse,
    RestaurantListResponse,
    SortRequest,
)
from .catalog.store import get_sample_restaurants
from .lunch_route.models import RoutePlan
from .lunch_route.planner import LunchRouteError, plan_lunch_route
from .ranking.clock import DEFAULT_CLOCK, Clock
from .ranking.filters import apply_filters
from .ranking.models import Restaurant
from .ranking.pipeline import recommend
from .ranking.scoring import is_lunch_hour, sort_by

app = FastAPI(title="CheapEats Ranking API", version="1.0.0")


def get_clock() -> Clock:
    return DEFAULT_CLOCK


def _candidates(restaurants: list[Restaurant] | None) -> list[Restaurant]:
    return get_sample_restaurants() if restaurants is None else restaurants


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/restaurants/sample", response_model=RestaurantListResponse)
def sample_restaurants() -> RestaurantListResponse:
    restaurants = get_sample_restaurants()
    return RestaurantListResponse(restaurants=restaurants, total=len(restaurants))


# ── Ranking endpoints ────────────────────────────────────────────────────


@app.post("/recommendations", response_model=RecommendationResponse)
def recommendations(
    body: RecommendationRequest,
    clock: Clock = Depends(get_clock),
) -> RecommendationResponse:
    candidates = _candidates(body.restaurants)
    ranked = recommend(
        candidates,
        body.filters,
        body.search_query,
        body.explanation,
        clock=clock,
    )
    return RecommendationResponse(
        recommendations=ranked[: body.limit],
        total_candidates=len(candidates),
        lunch_weights=is_lunch_hour(clock.now().hour),
    )


@app.post("/restaurants/filter", response_model=RestaurantListResponse)
def filter_restaurants(body: FilterRequest) -> RestaurantListResponse:
    restaurants = apply_filters(_candidates(body.restaurants), body.filters)
    return RestaurantListResponse(restaurants=restaurants, total=len(restaurants))


@app.post("/restaurants/sort", response_model=RestaurantListResponse)
def sort_restaurants(
    body: SortRequest,
    clock: Clock = Depends(get_clock),
) -> RestaurantListResponse:
    restaurants = sort_by(_candidates(body.restaurants), body.option, clock=clock)
    return RestaurantListResponse(restaurants=restaurants, total=len(restaurants))


@app.post("/lunch-route", response_model=RoutePlan)
def lunch_route(
    body: LunchRouteRequest,
    clock: Clock = Depends(get_clock),
) -> RoutePlan:
    try:
        return plan_lunch_route(
            _candidates(body.restaurants),
            body.filters,
            body.start,
            clock=clock,
        )
    except LunchRouteError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
