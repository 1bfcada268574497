from __future__ import annotations

from datetime import datetime

from cheapeats.ranking.clock import FixedClock
from cheapeats.ranking.models import FilterState, PriceFilterMode, RecommendationReason, Restaurant, SortOption
from cheapeats.ranking.pipeline import ExplanationStrategy, recommend
from cheapeats.ranking.scoring import generate_short_explanation
from cheapeats.ranking.trust import DataFreshness, PriceSource

CLOCK = FixedClock(datetime(2026, 10, 19, 18, 30))


def _restaurant(id: str = "1", **overrides) -> Restaurant:
    fields = dict(
        id=id,
        name="Test Restaurant",
        cuisine="Italian",
        price_level=1,
        average_price=12.0,
        price_source=PriceSource.VERIFIED,
        rating=4.0,
        near_transit=True,
        transit_walk_minutes=5,
        nearest_station="Union",
        is_open_now=True,
        data_freshness=DataFreshness.LIVE,
    )
    fields.update(overrides)
    return Restaurant(**fields)


def _ids(ranked) -> list[str]:
    return [item.restaurant.id for item in ranked]


def test_empty_input():
    assert recommend([], clock=CLOCK) == []


def test_default_filters_drop_only_closed():
    restaurants = [
        _restaurant("1"),
        _restaurant("2", is_open_now=False),
        _restaurant("3", is_open_now=None),
        _restaurant("4", average_price=30.0),
    ]
    assert sorted(_ids(recommend(restaurants, clock=CLOCK))) == ["1", "3", "4"]


def test_strict_under_15_excludes_estimated_prices():
    restaurants = [
        _restaurant("verified", average_price=14.0),
        _restaurant("estimated", average_price=6.0, price_source=PriceSource.ESTIMATED, rating=5.0),
        _restaurant("unpriced", average_price=None, price_level=0),
    ]
    state = FilterState(under_15_active=True, price_filter_mode=PriceFilterMode.STRICT)
    assert _ids(recommend(restaurants, state, clock=CLOCK)) == ["verified"]


def test_flexible_under_15_caps_estimated_prices_at_17():
    restaurants = [
        _restaurant("verified", average_price=14.0),
        _restaurant("estimated", average_price=16.5, price_source=PriceSource.ESTIMATED),
        _restaurant("steakhouse", average_price=40.0, price_source=PriceSource.ESTIMATED, rating=5.0),
    ]
    state = FilterState(under_15_active=True, price_filter_mode=PriceFilterMode.FLEXIBLE)
    assert sorted(_ids(recommend(restaurants, state, clock=CLOCK))) == ["estimated", "verified"]


def test_student_discount_filter_is_honored():
    restaurants = [
        _restaurant("deal", has_student_discount=True, rating=3.0),
        _restaurant("no_deal", has_student_discount=False, rating=5.0),
    ]
    state = FilterState(student_discount_active=True)
    assert _ids(recommend(restaurants, state, clock=CLOCK)) == ["deal"]


def test_filter_bar_toggles_never_relax_hard_filters():
    restaurants = [
        _restaurant("open_deal", has_student_discount=True),
        _restaurant("unknown_deal", has_student_discount=True, is_open_now=None),
    ]
    state = FilterState(student_discount_active=True, open_now_active=True)
    assert _ids(recommend(restaurants, state, clock=CLOCK)) == ["open_deal"]


def test_open_now_excludes_unknown_status():
    restaurants = [
        _restaurant("open", rating=3.0),
        _restaurant("unknown", is_open_now=None, rating=5.0, is_favorite=True),
    ]
    state = FilterState(open_now_active=True)
    assert _ids(recommend(restaurants, state, clock=CLOCK)) == ["open"]


def test_max_walk_minutes_is_enforced():
    restaurants = [
        _restaurant("near", transit_walk_minutes=3),
        _restaurant("far", transit_walk_minutes=9, rating=5.0),
        _restaurant("unknown", transit_walk_minutes=None),
    ]
    state = FilterState(max_walk_minutes=5)
    assert _ids(recommend(restaurants, state, clock=CLOCK)) == ["near"]


def test_items_carry_reasons_and_reason_explanation():
    r = _restaurant(rating=4.5)
    [item] = recommend([r], clock=CLOCK)
    assert item.reasons == [
        RecommendationReason.OPEN_NOW,
        RecommendationReason.VERIFIED_UNDER_15,
        RecommendationReason.NEAR_TRANSIT,
        RecommendationReason.HIGH_RATING,
    ]
    assert item.explanation == "Open now, verified cheap"
    assert item.trust_label == "Live data"


def test_canned_explanation_strategy():
    r = _restaurant(average_price=5.0, rating=4.6, nearest_station="Spadina", transit_walk_minutes=2)
    [item] = recommend([r], explanation=ExplanationStrategy.CANNED, clock=CLOCK)
    assert item.explanation == generate_short_explanation(r)
    assert item.reasons


def test_query_match_reason():
    r = _restaurant(name="Pho Hung", cuisine="Vietnamese", is_open_now=None, rating=3.0)
    [item] = recommend([r], search_query="pho", clock=CLOCK)
    assert RecommendationReason.QUERY_MATCH in item.reasons


def test_sort_option_reorders_without_rescoring():
    restaurants = [
        _restaurant("best", average_price=8.0, rating=4.8),
        _restaurant("cheapest", average_price=4.0, rating=2.0),
        _restaurant("middle", average_price=10.0, rating=3.5),
    ]
    by_score = recommend(restaurants, clock=CLOCK)
    by_price = recommend(restaurants, FilterState(sort_by=SortOption.PRICE_LOW), clock=CLOCK)

    assert _ids(by_score)[0] == "best"
    assert _ids(by_price) == ["cheapest", "best", "middle"]
    scores = {item.restaurant.id: item.score for item in by_score}
    assert {item.restaurant.id: item.score for item in by_price} == scores


def test_trust_invariant_survives_pipeline():
    restaurants = [
        _restaurant("U", rating=5.0, average_price=2.0, data_freshness=DataFreshness.UNKNOWN),
        _restaurant("C", rating=3.0, data_freshness=DataFreshness.CACHED),
    ]
    assert _ids(recommend(restaurants, clock=CLOCK)) == ["C", "U"]
