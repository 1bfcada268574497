from __future__ import annotations

from pydantic import BaseModel, Field

from .lunch_route.models import RouteStart
from .ranking.models import FilterState, RankedRestaurant, Restaurant, SortOption
from .ranking.pipeline import ExplanationStrategy


class RecommendationRequest(BaseModel):
    restaurants: list[Restaurant] | None = Field(
        default=None,
        description="Candidates to rank; the sample catalog is used when omitted",
    )
    filters: FilterState = Field(default_factory=FilterState)
    search_query: str | None = Field(default=None, max_length=200)
    explanation: ExplanationStrategy = ExplanationStrategy.REASONS
    limit: int = Field(default=10, ge=1, le=50)


class RecommendationResponse(BaseModel):
    recommendations: list[RankedRestaurant]
    total_candidates: int
    lunch_weights: bool


class FilterRequest(BaseModel):
    restaurants: list[Restaurant] | None = None
    filters: FilterState = Field(default_factory=FilterState)


class SortRequest(BaseModel):
    restaurants: list[Restaurant] | None = None
    option: SortOption = SortOption.RECOMMENDED


class RestaurantListResponse(BaseModel):
    restaurants: list[Restaurant]
    total: int


class LunchRouteRequest(BaseModel):
    restaurants: list[Restaurant] | None = None
    filters: FilterState = Field(default_factory=FilterState)
    start: RouteStart = Field(default_factory=RouteStart)
