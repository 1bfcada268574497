from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .config import DEFAULT_RANKING_CONFIG
from .trust import DataFreshness, PriceSource

_PRICE_THRESHOLD = DEFAULT_RANKING_CONFIG.price_threshold
_PRICE_POINTS = ["Free", "$", "$$", "$$$", "$$$$"]


class Restaurant(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    cuisine: str
    price_level: int = Field(default=1, ge=0, le=4)
    average_price: float | None = Field(default=None, ge=0.0)
    price_source: PriceSource = PriceSource.UNKNOWN
    rating: float = Field(default=0.0, ge=0.0, le=5.0)
    distance_meters: float = Field(default=0.0, ge=0.0)

    near_transit: bool = False
    transit_walk_minutes: int | None = Field(default=None, ge=0)  # advisory only
    nearest_station: str | None = None

    is_open_now: bool | None = None  # None = unknown
    data_freshness: DataFreshness = DataFreshness.UNKNOWN
    last_verified: datetime | None = None

    is_favorite: bool = False
    has_student_discount: bool = False

    address: str = ""
    opening_hours: str | None = None

    @property
    def price_point(self) -> str:
        return _PRICE_POINTS[self.price_level]

    def is_under(self, threshold: float = _PRICE_THRESHOLD) -> bool:
        """Numeric price under *threshold*, or a cheap price tier when no price is known."""
        if self.average_price is not None:
            return self.average_price < threshold
        return self.price_level <= 1

    def is_verified_under(self, threshold: float = _PRICE_THRESHOLD) -> bool:
        return (
            self.average_price is not None
            and self.average_price < threshold
            and self.price_source is PriceSource.VERIFIED
        )

    def is_flexibly_under(self, threshold: float = _PRICE_THRESHOLD) -> bool:
        """Under *threshold*, or no numeric price at all (kept as a fallback)."""
        return self.average_price is None or self.average_price < threshold

    @property
    def is_under_15(self) -> bool:
        return self.is_under()

    @property
    def is_verified_under_15(self) -> bool:
        return self.is_verified_under()

    @property
    def is_flexibly_under_15(self) -> bool:
        return self.is_flexibly_under()

    @property
    def price_confidence_label(self) -> str:
        return self.price_source.label


class PriceFilterMode(str, Enum):
    STRICT = "strict"  # verified (or unsourced) prices under $15 only
    FLEXIBLE = "flexible"  # estimated prices tolerated up to $17


class SortOption(str, Enum):
    RECOMMENDED = "recommended"
    PRICE_LOW = "price_low"
    RATING_HIGH = "rating_high"
    NEAREST_TRANSIT = "nearest_transit"


class HardFilters(BaseModel):
    """Constraints that exclude a restaurant outright; all active fields must hold."""

    model_config = ConfigDict(frozen=True)

    must_be_open: bool = False
    strict_under_15: bool = False
    must_be_near_transit: bool = False
    max_walk_minutes: int | None = Field(default=None, ge=0)


class FilterState(BaseModel):
    model_config = ConfigDict(frozen=True)

    under_15_active: bool = False
    price_filter_mode: PriceFilterMode = PriceFilterMode.STRICT
    student_discount_active: bool = False
    near_transit_active: bool = False
    open_now_active: bool = False
    max_walk_minutes: int | None = Field(default=None, ge=0)
    sort_by: SortOption = SortOption.RECOMMENDED

    def _toggles(self) -> list[bool]:
        return [
            self.under_15_active,
            self.student_discount_active,
            self.near_transit_active,
            self.open_now_active,
        ]

    @property
    def has_active_filters(self) -> bool:
        return any(self._toggles())

    @property
    def active_filter_count(self) -> int:
        return sum(self._toggles())

    def to_hard_filters(self) -> HardFilters:
        return HardFilters(
            must_be_open=self.open_now_active,
            strict_under_15=(
                self.under_15_active and self.price_filter_mode is PriceFilterMode.STRICT
            ),
            must_be_near_transit=self.near_transit_active,
            max_walk_minutes=self.max_walk_minutes,
        )


class RecommendationReason(str, Enum):
    OPEN_NOW = "open_now"
    VERIFIED_UNDER_15 = "verified_under_15"
    ESTIMATED_UNDER_15 = "estimated_under_15"
    NEAR_TRANSIT = "near_transit"
    HIGH_RATING = "high_rating"
    QUERY_MATCH = "query_match"
    STUDENT_DISCOUNT = "student_discount"
    QUICK_SERVICE = "quick_service"
    LUNCH_SPECIAL = "lunch_special"
    FASTEST_OPTION = "fastest_option"

    @property
    def label(self) -> str:
        return _REASON_LABELS[self]


_REASON_LABELS: dict[RecommendationReason, str] = {
    RecommendationReason.OPEN_NOW: "Open now",
    RecommendationReason.VERIFIED_UNDER_15: "Under $15 verified",
    RecommendationReason.ESTIMATED_UNDER_15: "~Under $15",
    RecommendationReason.NEAR_TRANSIT: "Near transit",
    RecommendationReason.HIGH_RATING: "Highly rated",
    RecommendationReason.QUERY_MATCH: "Matches search",
    RecommendationReason.STUDENT_DISCOUNT: "Student deal",
    RecommendationReason.QUICK_SERVICE: "Fast service",
    RecommendationReason.LUNCH_SPECIAL: "Lunch special",
    RecommendationReason.FASTEST_OPTION: "Fastest lunch",
}


class RankedRestaurant(BaseModel):
    model_config = ConfigDict(frozen=True)

    restaurant: Restaurant
    score: float
    reasons: list[RecommendationReason] = Field(default_factory=list, max_length=4)
    explanation: str
    trust_label: str = ""
