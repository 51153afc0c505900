"""Tests for weather_data module."""
from datetime import date

import pytest

from weather_data import CacheEntry, CitySnapshot, Condition, ForecastDay, clamp_humidity


@pytest.fixture
def snapshot():
    return CitySnapshot(
        city_key="zagreb",
        location="Zagreb 🏛️",
        temperature=3,
        condition=Condition.CLOUDY,
        emoji="☁️",
        wind_speed=12,
        humidity=75,
        feels_like=1,
        message="Oblaci pokrivaju nebo!",
        ascii_art="(art)",
    )


def test_snapshot_to_dict(snapshot):
    data = snapshot.to_dict()

    assert data["location"] == "Zagreb 🏛️"
    assert data["temperature"] == 3
    assert data["condition"] == "Oblačno"
    assert data["emoji"] == "☁️"
    assert data["description"] == "(art)"
    assert data["dramatic_message"] == "Oblaci pokrivaju nebo!"
    assert data["humidity"] == 75
    assert data["feels_like"] == 1


def test_snapshot_is_immutable(snapshot):
    with pytest.raises(AttributeError):
        snapshot.temperature = 10


@pytest.mark.parametrize("raw,expected", [(5, 30), (30, 30), (64, 64), (99, 99), (120, 99)])
def test_clamp_humidity(raw, expected):
    assert clamp_humidity(raw) == expected


def test_cache_entry_staleness(snapshot):
    entry = CacheEntry(snapshot=snapshot, last_refreshed=1000.0)

    assert entry.age(1200.0) == 200.0
    assert entry.is_stale(1300.0, 300) is False  # exactly at TTL is still fresh
    assert entry.is_stale(1300.5, 300) is True


def test_cache_entries_have_their_own_lock(snapshot):
    first = CacheEntry(snapshot=snapshot, last_refreshed=0.0)
    second = CacheEntry(snapshot=snapshot, last_refreshed=0.0)

    assert first.lock is not second.lock


def test_forecast_day_to_dict():
    day = ForecastDay(day=date(2026, 1, 12), high=9, low=-1, condition=Condition.RAIN, emoji="🌧️")

    assert day.to_dict() == {
        "date": "2026-01-12",
        "weekday": "Monday",
        "high": 9,
        "low": -1,
        "condition": "Kišno",
        "emoji": "🌧️",
    }
