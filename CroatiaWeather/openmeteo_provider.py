"""Open-Meteo forecast API provider implementation."""
import logging
import math
from datetime import date
from typing import Dict, List, Optional

import requests

from cities import CITIES, City
from weather_provider import (
    CurrentConditions,
    DailyForecast,
    WeatherProviderBase,
    WeatherProviderError,
)


def _finite(value) -> float:
    """Convert an upstream number, rejecting NaN and infinities."""
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"non-finite value: {value!r}")
    return number


class OpenMeteoProvider(WeatherProviderBase):
    """
    Weather provider using the Open-Meteo forecast API.

    Free API, no key required: https://open-meteo.com/en/docs
    Each request asks for both current conditions and the daily forecast.
    """

    BASE_URL = "https://api.open-meteo.com/v1/forecast"
    CURRENT_FIELDS = "temperature_2m,relative_humidity_2m,weather_code,wind_speed_10m"
    DAILY_FIELDS = "weather_code,temperature_2m_max,temperature_2m_min"

    def __init__(
        self,
        cities: Optional[Dict[str, City]] = None,
        base_url: str = BASE_URL,
        timezone: str = "Europe/Belgrade",
        timeout: float = 10,
    ):
        """
        Initialize Open-Meteo provider.

        Args:
            cities: City key to coordinates mapping (defaults to the built-in cities)
            base_url: Forecast endpoint
            timezone: Timezone used for daily aggregation
            timeout: HTTP request timeout in seconds
        """
        self.cities = CITIES if cities is None else cities
        self.base_url = base_url
        self.timezone = timezone
        self.timeout = timeout

    def get_current(self, city_key: str) -> CurrentConditions:
        data = self._request(city_key, current=True)
        try:
            current = data["current"]
            return CurrentConditions(
                temperature=_finite(current["temperature_2m"]),
                humidity=int(_finite(current["relative_humidity_2m"])),
                wind_speed=_finite(current["wind_speed_10m"]),
                weather_code=int(_finite(current["weather_code"])),
            )
        except (KeyError, ValueError, TypeError, OverflowError) as e:
            logging.error(f"Failed to parse current conditions for {city_key}: {e}")
            raise WeatherProviderError(f"Failed to parse response: {str(e)}") from e

    def get_daily(self, city_key: str) -> List[DailyForecast]:
        data = self._request(city_key, current=False)
        try:
            daily = data["daily"]
            days = zip(
                daily["time"],
                daily["weather_code"],
                daily["temperature_2m_max"],
                daily["temperature_2m_min"],
            )
            return [
                DailyForecast(
                    day=date.fromisoformat(day),
                    weather_code=int(_finite(code)),
                    temperature_max=_finite(high),
                    temperature_min=_finite(low),
                )
                for day, code, high, low in days
            ]
        except (KeyError, ValueError, TypeError, OverflowError) as e:
            logging.error(f"Failed to parse daily forecast for {city_key}: {e}")
            raise WeatherProviderError(f"Failed to parse response: {str(e)}") from e

    def _request(self, city_key: str, current: bool) -> dict:
        city = self.cities.get(city_key)
        if city is None:
            raise WeatherProviderError(f"City not found: {city_key}")

        params = {
            "latitude": f"{city.latitude:.4f}",
            "longitude": f"{city.longitude:.4f}",
            "daily": self.DAILY_FIELDS,
            "timezone": self.timezone,
        }
        if current:
            params["current"] = self.CURRENT_FIELDS

        try:
            logging.info(
                "Fetching weather data for %s at coordinates (%.4f, %.4f)",
                city_key, city.latitude, city.longitude,
            )
            logging.debug(f"Request parameters: {params}")

            response = requests.get(self.base_url, params=params, timeout=self.timeout)
            logging.debug(f"API response status: {response.status_code}")

            if not response.ok:
                logging.error(f"API request failed with status {response.status_code}")
                raise WeatherProviderError(
                    f"API error: {response.status_code} - {response.text[:200]}"
                )

            data = response.json()
            if not isinstance(data, dict):
                raise WeatherProviderError("Response is not a JSON object")
            logging.debug(f"API response (truncated): {str(data)[:500]}...")
            return data

        except requests.exceptions.JSONDecodeError as e:
            logging.error(f"Failed to decode API response: {e}")
            raise WeatherProviderError(f"Failed to decode response: {str(e)}") from e
        except requests.exceptions.RequestException as e:
            logging.error(f"Network error during API request: {e}")
            raise WeatherProviderError(f"Network error: {str(e)}") from e
