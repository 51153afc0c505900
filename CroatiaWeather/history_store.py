"""Bounded per-city temperature history used for trend arrows."""
import logging
import threading
import time
from collections import deque
from typing import Callable, Deque, Dict, Iterable, List, Tuple

from weather_data import Trend

# 4 hours of samples at the 5 minute refresh cadence
DEFAULT_MAX_SAMPLES = 48

Sample = Tuple[int, float]


class HistoryStore:
    """Keeps the most recent (temperature, timestamp) samples for each city."""

    def __init__(
        self,
        city_keys: Iterable[str],
        max_samples: int = DEFAULT_MAX_SAMPLES,
        clock: Callable[[], float] = time.time,
    ):
        self.max_samples = max_samples
        self._clock = clock
        self._lock = threading.Lock()
        self._samples: Dict[str, Deque[Sample]] = {
            key: deque(maxlen=max_samples) for key in city_keys
        }

    def append(self, city_key: str, temperature: int) -> None:
        """Record a sample; the oldest sample is dropped once the city is at capacity."""
        with self._lock:
            samples = self._samples.get(city_key)
            if samples is None:
                logging.debug(f"Ignoring history sample for unknown city {city_key}")
                return
            samples.append((temperature, self._clock()))

    def samples(self, city_key: str) -> List[Sample]:
        with self._lock:
            return list(self._samples.get(city_key, ()))

    def trend(self, city_key: str) -> Trend:
        """
        Compare the two most recent samples.

        Unknown cities and cities with fewer than two samples are stable.
        """
        with self._lock:
            samples = self._samples.get(city_key)
            if samples is None or len(samples) < 2:
                return Trend.STABLE
            current, previous = samples[-1][0], samples[-2][0]

        if current > previous:
            return Trend.RISING
        if current < previous:
            return Trend.FALLING
        return Trend.STABLE
