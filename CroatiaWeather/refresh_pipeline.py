"""Fetch-from-upstream step of the cache, with fallback to the existing snapshot."""
import logging
import random
import time
from typing import Callable, Dict, Optional

from cities import CITIES, City
from conditions import ascii_art, condition_for_code, dramatic_message, emoji_for
from history_store import HistoryStore
from weather_data import CacheEntry, CitySnapshot
from weather_provider import CurrentConditions, WeatherProviderBase, WeatherProviderError

# Rough estimate; the upstream current block has no apparent temperature.
FEELS_LIKE_OFFSET = 2


def build_snapshot(
    city: City,
    conditions: CurrentConditions,
    rng: random.Random,
) -> CitySnapshot:
    """Turn raw upstream conditions into a cached snapshot."""
    condition = condition_for_code(conditions.weather_code)
    temperature = int(conditions.temperature)
    return CitySnapshot(
        city_key=city.key,
        location=city.name,
        temperature=temperature,
        condition=condition,
        emoji=emoji_for(condition),
        wind_speed=int(conditions.wind_speed),
        humidity=conditions.humidity,
        feels_like=temperature - FEELS_LIKE_OFFSET,
        message=dramatic_message(condition, rng),
        ascii_art=ascii_art(condition),
    )


class RefreshPipeline:
    """
    Refreshes cache entries from the upstream provider.

    Upstream failures never propagate: the entry keeps its old snapshot and
    timestamp, so the next read past the TTL tries again.
    """

    def __init__(
        self,
        provider: WeatherProviderBase,
        history: HistoryStore,
        cities: Optional[Dict[str, City]] = None,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.provider = provider
        self.history = history
        self.cities = CITIES if cities is None else cities
        self.rng = rng or random.Random()
        self._clock = clock

    def fetch_snapshot(self, city_key: str) -> CitySnapshot:
        """
        Fetch and build a fresh snapshot without touching any entry.

        Raises:
            WeatherProviderError: On network, status or decode failure, or if
                the city has no coordinates
        """
        city = self.cities.get(city_key)
        if city is None:
            raise WeatherProviderError(f"City not found: {city_key}")
        conditions = self.provider.get_current(city_key)
        return build_snapshot(city, conditions, self.rng)

    def refresh(self, city_key: str, entry: CacheEntry) -> bool:
        """
        Refresh one entry in place. The caller must hold ``entry.lock``.

        Returns:
            bool: True if the entry now holds fresh data
        """
        try:
            snapshot = self.fetch_snapshot(city_key)
        except WeatherProviderError as e:
            logging.warning(f"API refresh failed for {city_key}: {e}. Using cached data.")
            return False

        entry.snapshot = snapshot
        entry.last_refreshed = self._clock()
        self.history.append(city_key, snapshot.temperature)
        logging.info(
            f"Successfully refreshed weather data for {city_key}: "
            f"{snapshot.temperature}°C, {snapshot.condition.value}"
        )
        return True
