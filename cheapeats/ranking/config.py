from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class ScoringWeights:
    value: float
    transit: float
    rating: float


DEFAULT_WEIGHTS = ScoringWeights(value=0.40, transit=0.30, rating=0.30)
# Used during lunch hours; transit proximity weighs highest.
LUNCH_WEIGHTS = ScoringWeights(value=0.35, transit=0.45, rating=0.20)


@dataclass(frozen=True)
class RankingConfig:
    price_threshold: float = 15.0
    flexible_price_ceiling: float = 17.0
    stupid_cheap_price: float = 12.0
    transit_horizon_minutes: float = 10.0
    neutral_score: float = 0.5

    default_weights: ScoringWeights = field(default_factory=lambda: DEFAULT_WEIGHTS)
    lunch_weights: ScoringWeights = field(default_factory=lambda: LUNCH_WEIGHTS)
    lunch_start_hour: int = int(os.getenv("CHEAPEATS_LUNCH_START_HOUR", "11"))
    lunch_end_hour: int = int(os.getenv("CHEAPEATS_LUNCH_END_HOUR", "13"))  # inclusive

    favorite_boost: float = 1.15
    walking_speed_m_per_min: float = 80.0

    max_reasons: int = 4
    high_rating_threshold: float = 4.3
    near_transit_reason_minutes: int = 5
    explanation_max_chars: int = 60


DEFAULT_RANKING_CONFIG = RankingConfig()
