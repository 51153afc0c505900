"""Per-city weather cache with refresh-on-stale reads."""
import logging
import random
import threading
import time
from typing import Callable, Dict, Iterable, List, Optional

from cities import fallback_snapshot
from refresh_pipeline import RefreshPipeline
from weather_data import CacheEntry, CitySnapshot
from weather_provider import WeatherProviderError

DEFAULT_TTL_SECONDS = 300


class UnknownLocation(LookupError):
    """Raised when a city key is not in the cache registry."""
    pass


class WeatherCache:
    """
    Cache of one snapshot per configured city.

    Reads refresh the entry through the pipeline when it is older than the
    TTL. The refresh runs under the entry's own lock, so concurrent readers
    of the same city wait for it to finish while other cities are served
    without blocking. If the refresh fails the stale snapshot is returned.
    """

    def __init__(
        self,
        pipeline: RefreshPipeline,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize weather cache.

        Args:
            pipeline: Refresh pipeline used for upstream fetches
            ttl_seconds: Age after which a read triggers a refresh attempt
            clock: Source of the current time in seconds
        """
        self.pipeline = pipeline
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._registry_lock = threading.Lock()
        self._entries: Dict[str, CacheEntry] = {}

    def seed(self, city_keys: Iterable[str], rng: Optional[random.Random] = None) -> None:
        """
        Create an entry for every city, trying the upstream first.

        Cities whose initial fetch fails start from the built-in fallback
        snapshot. Seeding does not record history.
        """
        rng = rng or self.pipeline.rng
        for city_key in city_keys:
            logging.info(f"Initializing weather data for {city_key}")
            try:
                snapshot = self.pipeline.fetch_snapshot(city_key)
                logging.info(f"Loaded real weather for {city_key}: {snapshot.temperature}°C, {snapshot.condition.value}")
            except WeatherProviderError as e:
                logging.warning(f"Failed to fetch real weather for {city_key}: {e}. Using fallback data.")
                try:
                    snapshot = fallback_snapshot(city_key, rng)
                except KeyError:
                    logging.warning(f"No fallback data available for {city_key}. Skipping.")
                    continue
            self.put(city_key, snapshot)

    def put(self, city_key: str, snapshot: CitySnapshot) -> None:
        with self._registry_lock:
            self._entries[city_key.lower()] = CacheEntry(snapshot=snapshot, last_refreshed=self._clock())

    def _entry(self, city_key: str) -> CacheEntry:
        with self._registry_lock:
            entry = self._entries.get(city_key.lower())
        if entry is None:
            raise UnknownLocation(f"Location not found: {city_key}")
        return entry

    def __contains__(self, city_key: str) -> bool:
        with self._registry_lock:
            return city_key.lower() in self._entries

    def city_keys(self) -> List[str]:
        with self._registry_lock:
            return list(self._entries)

    def last_refreshed(self, city_key: str) -> float:
        entry = self._entry(city_key)
        with entry.lock:
            return entry.last_refreshed

    def peek(self, city_key: str) -> CitySnapshot:
        """
        Get the cached snapshot without refreshing it, however old it is.

        Raises:
            UnknownLocation: If the city is not in the registry
        """
        entry = self._entry(city_key)
        with entry.lock:
            return entry.snapshot

    def get(self, city_key: str) -> CitySnapshot:
        """
        Get the snapshot for a city, refreshing it first if stale.

        Returns:
            CitySnapshot: Latest snapshot (may be stale if the refresh failed)

        Raises:
            UnknownLocation: If the city is not in the registry
        """
        city_key = city_key.lower()
        entry = self._entry(city_key)

        with entry.lock:
            now = self._clock()
            age = entry.age(now)
            if entry.is_stale(now, self.ttl_seconds):
                logging.info(f"Refreshing weather data for {city_key} (age: {age:.1f}s > TTL: {self.ttl_seconds}s)")
                self.pipeline.refresh(city_key, entry)
            else:
                logging.debug(f"Using cached weather data for {city_key} (age: {age:.1f}s, TTL: {self.ttl_seconds}s)")
            return entry.snapshot
