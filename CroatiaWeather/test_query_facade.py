"""Tests for the query facade."""
import random
from datetime import date
from unittest.mock import Mock, patch

import pytest

from cities import CITIES
from history_store import HistoryStore
from openmeteo_provider import OpenMeteoProvider
from query_facade import QueryFacade
from rate_limiter import RateLimiter, RateLimitExceeded
from refresh_pipeline import RefreshPipeline
from weather_cache import UnknownLocation, WeatherCache
from weather_provider import CurrentConditions, WeatherProviderError


@pytest.fixture
def facade(provider, clock):
    history = HistoryStore(CITIES, clock=clock)
    pipeline = RefreshPipeline(provider, history, rng=random.Random(1), clock=clock)
    cache = WeatherCache(pipeline, clock=clock)
    cache.seed(CITIES)
    limiter = RateLimiter(max_requests=100, window_seconds=60, clock=clock)
    return QueryFacade(limiter, cache, history, provider, rng=random.Random(5), today=lambda: date(2026, 1, 10))


def test_query_current(facade):
    result = facade.query_current("zagreb")

    assert result["location"] == "Zagreb 🏛️"
    assert result["temperature"] == 20
    assert result["condition"] == "Sunčano"
    assert result["trend"] == "stable"
    assert 0 <= result["uv_index"] <= 11
    assert 0 <= result["precip_chance"] <= 99


def test_synthetic_fields_are_not_cached(facade):
    results = [facade.query_current("split") for _ in range(20)]

    core = {(r["temperature"], r["condition"], r["dramatic_message"]) for r in results}
    assert len(core) == 1
    assert len({(r["uv_index"], r["precip_chance"]) for r in results}) > 1
    assert "uv_index" not in facade.cache.get("split").to_dict()


def test_synthetic_fields_are_deterministic_for_a_seed(provider, clock):
    def build():
        history = HistoryStore(CITIES, clock=clock)
        cache = WeatherCache(RefreshPipeline(provider, history, rng=random.Random(1), clock=clock), clock=clock)
        cache.seed(["zagreb"])
        return QueryFacade(RateLimiter(clock=clock), cache, history, provider, rng=random.Random(11))

    assert build().query_current("zagreb") == build().query_current("zagreb")


def test_query_current_reports_trend(facade, provider, clock):
    for temp in (4.2, 6.9):
        provider.conditions["osijek"] = CurrentConditions(temp, 70, 5.0, 3)
        clock.advance(301)
        facade.query_current("osijek")

    assert facade.query_current("osijek")["trend"] == "rising"


def test_query_current_unknown_location(facade):
    with pytest.raises(UnknownLocation):
        facade.query_current("london")


def test_rate_limit_applies_before_lookup(facade):
    for _ in range(100):
        facade.query_current("zagreb")

    with pytest.raises(RateLimitExceeded):
        facade.query_current("zagreb")
    with pytest.raises(RateLimitExceeded):
        facade.query_current("london")


def test_current_weather_statuses(facade):
    body, status = facade.current_weather("Rijeka")
    assert status == 200
    assert body["location"] == "Rijeka 🌊"

    body, status = facade.current_weather("london")
    assert status == 404
    assert body == {"error": "Location not found"}

    for _ in range(98):
        facade.current_weather("zagreb")
    body, status = facade.current_weather("zagreb")
    assert status == 429
    assert body == {"error": "Rate limit exceeded"}


def test_query_forecast_from_upstream(facade, provider):
    result = facade.query_forecast("zadar")

    assert provider.daily_calls == ["zadar"]
    assert result["current"]["location"] == "Zadar 🐚"
    assert len(result["forecast"]) == 5
    assert result["forecast"][0] == {
        "date": "2026-01-10",
        "weekday": "Saturday",
        "high": 8,
        "low": -1,
        "condition": "Oblačno",
        "emoji": "☁️",
    }


def test_query_forecast_refetches_every_call(facade, provider):
    facade.query_forecast("zadar")
    facade.query_forecast("zadar")

    assert provider.daily_calls == ["zadar", "zadar"]


def test_query_forecast_falls_back_on_upstream_failure(facade, provider):
    provider.raise_error = WeatherProviderError("Network error")

    result = facade.query_forecast("split")

    assert result["current"]["location"] == "Split 🏖️"
    assert [d["date"] for d in result["forecast"]] == [
        "2026-01-11", "2026-01-12", "2026-01-13", "2026-01-14", "2026-01-15",
    ]


def test_query_forecast_unknown_location_is_generated(facade, provider):
    body, status = facade.forecast("london")

    assert status == 200
    assert body["current"] is None
    assert len(body["forecast"]) == 5
    assert provider.daily_calls == []


def test_forecast_rate_limited(facade):
    for _ in range(100):
        facade.forecast("zagreb")

    body, status = facade.forecast("zagreb")
    assert status == 429
    assert body == {"error": "Rate limit exceeded"}


def test_query_forecast_does_not_refresh_current(facade, provider, clock):
    before = facade.cache.last_refreshed("dubrovnik")
    clock.advance(301)

    result = facade.query_forecast("dubrovnik")

    assert result["current"]["location"] == "Dubrovnik ⛱️"
    assert provider.calls.count("dubrovnik") == 1  # only the seed fetch
    assert facade.cache.last_refreshed("dubrovnik") == before
    assert facade.history.samples("dubrovnik") == []


def test_forecast_with_non_finite_upstream_is_generated(clock):
    provider = OpenMeteoProvider()
    history = HistoryStore(CITIES, clock=clock)
    cache = WeatherCache(RefreshPipeline(provider, history, rng=random.Random(1), clock=clock), clock=clock)
    response = Mock()
    response.ok = True
    response.status_code = 200
    response.json.return_value = {
        "daily": {
            "time": ["2026-01-10", "2026-01-11"],
            "weather_code": [3, 61],
            "temperature_2m_max": [float("inf"), 7.0],
            "temperature_2m_min": [0.0, 1.0],
        },
    }

    with patch('openmeteo_provider.requests.get', return_value=response):
        cache.seed(["zagreb"])  # no current block, so the fallback snapshot is used
        facade = QueryFacade(RateLimiter(clock=clock), cache, history, provider,
                             rng=random.Random(5), today=lambda: date(2026, 1, 10))
        body, status = facade.forecast("zagreb")

    assert status == 200
    assert body["current"]["location"] == "Zagreb 🏛️"
    assert [d["date"] for d in body["forecast"]] == [
        "2026-01-11", "2026-01-12", "2026-01-13", "2026-01-14", "2026-01-15",
    ]
