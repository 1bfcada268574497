from __future__ import annotations

import logging
from datetime import datetime

import pandas as pd
from pydantic import ValidationError

from ..ranking.models import Restaurant
from .config import DEFAULT_CATALOG_CONFIG, CatalogConfig

logger = logging.getLogger(__name__)

_restaurants: list[Restaurant] | None = None


def _optional(value: str) -> str | None:
    value = value.strip()
    return value or None


def _optional_float(value: str) -> float | None:
    raw = _optional(value)
    return float(raw) if raw is not None else None


def _optional_int(value: str) -> int | None:
    raw = _optional(value)
    return int(raw) if raw is not None else None


def _tri_state(value: str) -> bool | None:
    """Parse "true"/"false" and treat a blank cell as unknown."""
    raw = _optional(value)
    if raw is None:
        return None
    return raw.lower() in ("true", "1", "yes")


def _row_to_restaurant(row: pd.Series) -> Restaurant:
    last_verified = _optional(row.get("last_verified", ""))
    return Restaurant(
        id=row["id"],
        name=row["name"],
        cuisine=row["cuisine"],
        price_level=int(row["price_level"]),
        average_price=_optional_float(row["average_price"]),
        price_source=_optional(row["price_source"]) or "unknown",
        rating=float(row["rating"]),
        distance_meters=_optional_float(row["distance_meters"]) or 0.0,
        near_transit=bool(_tri_state(row["near_transit"])),
        transit_walk_minutes=_optional_int(row["transit_walk_minutes"]),
        nearest_station=_optional(row["nearest_station"]),
        is_open_now=_tri_state(row["is_open_now"]),
        data_freshness=_optional(row["data_freshness"]) or "unknown",
        last_verified=datetime.fromisoformat(last_verified) if last_verified else None,
        is_favorite=bool(_tri_state(row["is_favorite"])),
        has_student_discount=bool(_tri_state(row["has_student_discount"])),
        address=row.get("address", ""),
    )


def load_restaurants(config: CatalogConfig = DEFAULT_CATALOG_CONFIG) -> list[Restaurant]:
    """Read the catalog CSV into ``Restaurant`` records.

    Rows that fail validation are logged and skipped.
    """
    df = pd.read_csv(config.data_path, dtype=str, keep_default_na=False)

    restaurants: list[Restaurant] = []
    for _, row in df.iterrows():
        try:
            restaurants.append(_row_to_restaurant(row))
        except (ValidationError, ValueError):
            logger.warning("Skipping malformed catalog row %r", row.get("id"), exc_info=True)
    return restaurants


def get_sample_restaurants() -> list[Restaurant]:
    """Return the bundled sample restaurants, loading them on first call."""
    global _restaurants
    if _restaurants is None:
        _restaurants = load_restaurants()
    return list(_restaurants)
