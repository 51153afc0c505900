"""Weather provider abstraction - allows swapping different weather APIs."""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from typing import List


@dataclass(frozen=True)
class CurrentConditions:
    """Raw current conditions as reported by the upstream API."""
    temperature: float
    humidity: int
    wind_speed: float
    weather_code: int


@dataclass(frozen=True)
class DailyForecast:
    """One day of the upstream multi-day forecast."""
    day: date
    weather_code: int
    temperature_max: float
    temperature_min: float


class WeatherProviderBase(ABC):
    """Abstract base class for weather data providers."""

    @abstractmethod
    def get_current(self, city_key: str) -> CurrentConditions:
        """
        Fetch current conditions for a configured city.

        Returns:
            CurrentConditions: Current weather information

        Raises:
            WeatherProviderError: If the provider fails to fetch data
        """
        pass

    @abstractmethod
    def get_daily(self, city_key: str) -> List[DailyForecast]:
        """
        Fetch the multi-day forecast for a configured city.

        Raises:
            WeatherProviderError: If the provider fails to fetch data
        """
        pass


class WeatherProviderError(Exception):
    """Exception raised when a weather provider fails."""
    pass
