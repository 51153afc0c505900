"""Command line runner for the Croatian city weather cache."""
import argparse
import json
import logging
import os
import random
import signal
import sys
import time
from typing import List, Optional, Tuple

from dotenv import load_dotenv

from cities import CITIES
from history_store import HistoryStore
from openmeteo_provider import OpenMeteoProvider
from query_facade import QueryFacade
from rate_limiter import RateLimiter
from refresh_pipeline import RefreshPipeline
from weather_cache import WeatherCache
from weather_provider import WeatherProviderBase

BASE_DIR = os.path.dirname(os.path.abspath(__file__))


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser("Croatian city weather cache")
    parser.add_argument("cities", nargs="*", help="City keys to query (default: all)")
    parser.add_argument("--log-file", default=None)
    parser.add_argument("--cache-ttl", type=int, default=300)
    parser.add_argument("--rate-limit", type=int, default=100, help="Requests per window")
    parser.add_argument("--rate-window", type=float, default=60.0, help="Rate limit window in seconds")
    parser.add_argument("--timeout", type=float, default=10, help="HTTP timeout in seconds")
    parser.add_argument("--refresh", type=float, default=60.0, help="Seconds between queries")
    parser.add_argument("--forecast", action="store_true", help="Query the 5-day forecast instead")
    parser.add_argument("--once", action="store_true", help="Query once and exit")
    parser.add_argument("--seed", type=int, default=None, help="Seed for synthetic fields")
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def setup_logging(log_file: Optional[str], verbose: bool) -> None:
    log_level = logging.DEBUG if verbose else logging.INFO
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        if not os.path.isabs(log_file):
            log_file = os.path.join(BASE_DIR, log_file)
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )


def load_config() -> Tuple[str, str]:
    load_dotenv()
    api_url = os.getenv("WEATHER_API_URL", OpenMeteoProvider.BASE_URL)
    timezone = os.getenv("WEATHER_TIMEZONE", "Europe/Belgrade")

    if not api_url.startswith(("http://", "https://")):
        raise SystemExit(f"Invalid WEATHER_API_URL: {api_url}")

    logging.info("Configuration loaded: api_url=%s timezone=%s", api_url, timezone)
    return api_url, timezone


def build_facade(
    provider: WeatherProviderBase,
    args: argparse.Namespace,
    rng: Optional[random.Random] = None,
) -> QueryFacade:
    """Wire the process-wide state objects and seed the cache."""
    rng = rng or random.Random(args.seed)
    history = HistoryStore(CITIES)
    pipeline = RefreshPipeline(provider, history, rng=rng)
    cache = WeatherCache(pipeline, ttl_seconds=args.cache_ttl)

    logging.info("Fetching real weather data from Open-Meteo API...")
    cache.seed(CITIES)
    logging.info("Weather cache initialized (ttl=%ss)", args.cache_ttl)

    rate_limiter = RateLimiter(max_requests=args.rate_limit, window_seconds=args.rate_window)
    return QueryFacade(rate_limiter, cache, history, provider, rng=rng)


def query_cities(facade: QueryFacade, cities: List[str], forecast: bool) -> dict:
    results = {}
    for city in cities:
        body, status = facade.forecast(city) if forecast else facade.current_weather(city)
        if status != 200:
            logging.error("Query for %s failed with status %s: %s", city, status, body["error"])
        results[city] = {"status": status, "body": body}
    return results


def weather_loop(facade: QueryFacade, args: argparse.Namespace) -> None:
    cities = args.cities or list(CITIES)
    frame = 0
    while True:
        frame += 1
        logging.info("Frame %s: querying %s", frame, ", ".join(cities))
        results = query_cities(facade, cities, args.forecast)
        print(json.dumps(results, ensure_ascii=False, indent=2), flush=True)
        if args.once:
            return
        time.sleep(max(args.refresh, 1.0))


def signal_handler(signum, frame):
    logging.info("Received signal %s, shutting down", signum)
    raise KeyboardInterrupt()


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    setup_logging(args.log_file, args.verbose)
    api_url, timezone = load_config()

    provider = OpenMeteoProvider(base_url=api_url, timezone=timezone, timeout=args.timeout)
    facade = build_facade(provider, args)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    try:
        weather_loop(facade, args)
    except KeyboardInterrupt:
        logging.info("Stopping weather queries")


if __name__ == "__main__":
    main()
