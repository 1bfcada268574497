from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from ..ranking.models import RecommendationReason, Restaurant

FAST_OPTION_MINUTES = 5


class RouteStartKind(str, Enum):
    current_location = "current_location"
    station = "station"


class RouteStart(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: RouteStartKind = RouteStartKind.current_location
    station_name: str | None = None

    @property
    def display_name(self) -> str:
        if self.kind is RouteStartKind.station and self.station_name:
            return f"{self.station_name} Station"
        return "Current Location"


class RouteCandidate(BaseModel):
    model_config = ConfigDict(frozen=True)

    restaurant: Restaurant
    reasons: list[RecommendationReason] = Field(default_factory=list)
    eta_minutes: int = Field(..., ge=0)
    walk_from_station: int | None = None
    nearest_station: str | None = None
    score: float
    explanation: str

    @property
    def eta_display(self) -> str:
        if self.eta_minutes <= 1:
            return "1 min walk"
        if self.eta_minutes < 60:
            return f"{self.eta_minutes} min walk"
        hours, mins = divmod(self.eta_minutes, 60)
        return f"{hours}h walk" if mins == 0 else f"{hours}h {mins}m walk"

    @property
    def is_fast_option(self) -> bool:
        return self.eta_minutes <= FAST_OPTION_MINUTES


class RoutePlan(BaseModel):
    primary: RouteCandidate
    backup: RouteCandidate | None = None
    start: RouteStart
    generated_at: datetime
    is_from_cache: bool = False
