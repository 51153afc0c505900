"""Shared fixtures: a controllable clock and a scriptable weather provider."""
import random
from datetime import date

import pytest

from weather_provider import CurrentConditions, DailyForecast, WeatherProviderBase


class FakeClock:
    """Manually advanced replacement for time.time."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class MockProvider(WeatherProviderBase):
    """Mock weather provider for testing."""

    def __init__(self, conditions=None, daily=None, raise_error=None):
        self.conditions = conditions or {}
        self.default = CurrentConditions(temperature=20.7, humidity=55, wind_speed=7.9, weather_code=0)
        self.daily = daily
        self.raise_error = raise_error
        self.calls = []
        self.daily_calls = []

    def get_current(self, city_key):
        self.calls.append(city_key)
        if self.raise_error:
            raise self.raise_error
        return self.conditions.get(city_key, self.default)

    def get_daily(self, city_key):
        self.daily_calls.append(city_key)
        if self.raise_error:
            raise self.raise_error
        if self.daily is None:
            return [
                DailyForecast(date(2026, 1, 10 + i), weather_code=3, temperature_max=8.9, temperature_min=-1.5)
                for i in range(7)
            ]
        return self.daily


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def rng():
    return random.Random(42)


@pytest.fixture
def provider():
    return MockProvider()
