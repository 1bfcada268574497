from __future__ import annotations

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from cheapeats.app import app, get_clock
from cheapeats.ranking.clock import FixedClock

MORNING = FixedClock(datetime(2026, 10, 19, 9, 0))
NOON = FixedClock(datetime(2026, 10, 19, 12, 0))

client = TestClient(app)


@pytest.fixture(autouse=True)
def _fixed_clock():
    app.dependency_overrides[get_clock] = lambda: MORNING
    yield
    app.dependency_overrides.clear()


def _restaurant(id: str, **overrides) -> dict:
    body = {
        "id": id,
        "name": f"Restaurant {id}",
        "cuisine": "Thai",
        "price_level": 1,
        "average_price": 11.0,
        "price_source": "verified",
        "rating": 4.0,
        "distance_meters": 400,
        "near_transit": True,
        "transit_walk_minutes": 4,
        "nearest_station": "Dundas",
        "is_open_now": True,
        "data_freshness": "live",
    }
    body.update(overrides)
    return body


def test_health():
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_sample_restaurants():
    resp = client.get("/restaurants/sample")
    assert resp.status_code == 200
    data = resp.json()
    assert data["total"] == 14
    assert len(data["restaurants"]) == 14


# ── Recommendations ──────────────────────────────────────────────────────


def test_recommendations_from_sample_catalog():
    resp = client.post("/recommendations", json={})
    assert resp.status_code == 200
    data = resp.json()
    assert data["total_candidates"] == 14
    assert len(data["recommendations"]) == 10
    assert data["lunch_weights"] is False

    scores = [item["score"] for item in data["recommendations"]]
    assert scores == sorted(scores, reverse=True)
    for item in data["recommendations"]:
        assert item["restaurant"]["is_open_now"] is not False
        assert len(item["reasons"]) <= 4
        assert item["explanation"]


def test_recommendations_respect_limit():
    resp = client.post("/recommendations", json={"limit": 3})
    assert resp.status_code == 200
    assert len(resp.json()["recommendations"]) == 3


def test_recommendations_report_lunch_weights():
    app.dependency_overrides[get_clock] = lambda: NOON
    resp = client.post("/recommendations", json={"limit": 1})
    assert resp.json()["lunch_weights"] is True


def test_recommendations_with_supplied_restaurants_and_filters():
    body = {
        "restaurants": [
            _restaurant("open"),
            _restaurant("unknown", is_open_now=None, rating=5.0),
        ],
        "filters": {"open_now_active": True},
        "explanation": "canned",
    }
    resp = client.post("/recommendations", json=body)
    assert resp.status_code == 200
    data = resp.json()
    assert [item["restaurant"]["id"] for item in data["recommendations"]] == ["open"]
    assert data["recommendations"][0]["trust_label"] == "Live data"


@pytest.mark.parametrize("limit", [0, 51])
def test_recommendations_reject_bad_limit(limit):
    resp = client.post("/recommendations", json={"limit": limit})
    assert resp.status_code == 422


def test_recommendations_reject_invalid_rating():
    resp = client.post("/recommendations", json={"restaurants": [_restaurant("1", rating=6.0)]})
    assert resp.status_code == 422


# ── Filter and sort ──────────────────────────────────────────────────────


def test_filter_student_discount():
    resp = client.post("/restaurants/filter", json={"filters": {"student_discount_active": True}})
    assert resp.status_code == 200
    data = resp.json()
    assert sorted(r["id"] for r in data["restaurants"]) == ["10", "3", "4", "6"]
    assert data["total"] == 4


def test_sort_by_price():
    resp = client.post("/restaurants/sort", json={"option": "price_low"})
    assert resp.status_code == 200
    ids = [r["id"] for r in resp.json()["restaurants"]]
    assert ids[0] == "1"
    assert ids[-1] == "14"


def test_sort_recommended_excludes_closed():
    resp = client.post("/restaurants/sort", json={"option": "recommended"})
    ids = [r["id"] for r in resp.json()["restaurants"]]
    assert "14" not in ids
    assert len(ids) == 13


# ── Lunch route ──────────────────────────────────────────────────────────


def test_lunch_route():
    app.dependency_overrides[get_clock] = lambda: NOON
    body = {"start": {"kind": "station", "station_name": "Spadina"}}
    resp = client.post("/lunch-route", json=body)
    assert resp.status_code == 200
    data = resp.json()
    assert data["primary"]["restaurant"]["id"]
    assert data["backup"] is not None
    assert data["start"]["kind"] == "station"
    assert data["is_from_cache"] is False


def test_lunch_route_no_match_is_404():
    resp = client.post("/lunch-route", json={"filters": {"max_walk_minutes": 0}})
    assert resp.status_code == 404
    assert resp.json()["detail"] == "No restaurants match your filters"
