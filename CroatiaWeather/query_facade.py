"""Entry point for callers: rate limiting, cache lookup and response assembly."""
import logging
import random
from datetime import date
from typing import Callable, Optional, Tuple

from forecast import forecast_from_daily, generate_forecast
from history_store import HistoryStore
from rate_limiter import RateLimiter, RateLimitExceeded
from weather_cache import UnknownLocation, WeatherCache
from weather_provider import WeatherProviderBase, WeatherProviderError

HTTP_OK = 200
HTTP_NOT_FOUND = 404
HTTP_TOO_MANY_REQUESTS = 429


class QueryFacade:
    """
    The only component external callers use.

    Every query is counted against the rate limiter before anything else.
    UV index and precipitation chance are drawn per call and never cached.
    """

    def __init__(
        self,
        rate_limiter: RateLimiter,
        cache: WeatherCache,
        history: HistoryStore,
        provider: WeatherProviderBase,
        rng: Optional[random.Random] = None,
        today: Callable[[], date] = date.today,
    ):
        self.rate_limiter = rate_limiter
        self.cache = cache
        self.history = history
        self.provider = provider
        self.rng = rng or random.Random()
        self._today = today

    def query_current(self, city_key: str) -> dict:
        """
        Current weather for a city.

        Raises:
            RateLimitExceeded: If the request window is full
            UnknownLocation: If the city is not configured
        """
        self.rate_limiter.check()
        city_key = city_key.lower()
        snapshot = self.cache.get(city_key)

        result = snapshot.to_dict()
        result["uv_index"] = float(self.rng.randrange(12))
        result["precip_chance"] = self.rng.randrange(100)
        result["trend"] = self.history.trend(city_key).value
        logging.debug(f"Sending weather data for {city_key}: {result}")
        return result

    def query_forecast(self, city_key: str) -> dict:
        """
        Five-day forecast, fetched from upstream on every call.

        Falls back to a generated forecast when the upstream fails or the
        city is not in the cache registry.

        Raises:
            RateLimitExceeded: If the request window is full
        """
        self.rate_limiter.check()
        city_key = city_key.lower()

        current = None
        forecast = []
        if city_key in self.cache:
            current = self.cache.peek(city_key).to_dict()
            try:
                forecast = forecast_from_daily(self.provider.get_daily(city_key))
            except WeatherProviderError as e:
                logging.warning(f"Forecast fetch failed for {city_key}: {e}. Using generated forecast.")
        else:
            logging.info(f"No cached location {city_key}, using generated forecast")

        if not forecast:
            forecast = generate_forecast(self.rng, self._today())

        return {
            "current": current,
            "forecast": [day.to_dict() for day in forecast],
        }

    def current_weather(self, city_key: str) -> Tuple[dict, int]:
        """JSON body and HTTP status for a current weather request."""
        try:
            return self.query_current(city_key), HTTP_OK
        except RateLimitExceeded:
            return {"error": "Rate limit exceeded"}, HTTP_TOO_MANY_REQUESTS
        except UnknownLocation:
            logging.info(f"Location not found in cache: {city_key}")
            return {"error": "Location not found"}, HTTP_NOT_FOUND

    def forecast(self, city_key: str) -> Tuple[dict, int]:
        """JSON body and HTTP status for a forecast request."""
        try:
            return self.query_forecast(city_key), HTTP_OK
        except RateLimitExceeded:
            return {"error": "Rate limit exceeded"}, HTTP_TOO_MANY_REQUESTS
