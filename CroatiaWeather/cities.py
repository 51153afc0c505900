"""Configured cities: coordinates for the upstream API and static fallbacks."""
import random
from dataclasses import dataclass
from typing import Dict

from conditions import ascii_art, dramatic_message, emoji_for
from weather_data import CitySnapshot, Condition, clamp_humidity


@dataclass(frozen=True)
class City:
    key: str
    name: str
    latitude: float
    longitude: float


CITIES: Dict[str, City] = {
    "zagreb": City("zagreb", "Zagreb 🏛️", 45.815, 15.9819),
    "split": City("split", "Split 🏖️", 43.5081, 16.4402),
    "dubrovnik": City("dubrovnik", "Dubrovnik ⛱️", 42.6412, 18.1084),
    "rijeka": City("rijeka", "Rijeka 🌊", 45.3271, 14.4205),
    "zadar": City("zadar", "Zadar 🐚", 43.1312, 15.2313),
    "osijek": City("osijek", "Osijek 🌾", 45.5544, 18.6955),
}

# (temperature, condition, wind speed, humidity, feels like)
FALLBACK_WEATHER = {
    "zagreb": (3, Condition.CLOUDY, 12, 75, 0),
    "split": (11, Condition.CLEAR, 8, 65, 10),
    "dubrovnik": (13, Condition.CLEAR, 5, 60, 12),
    "rijeka": (5, Condition.RAIN, 18, 88, 2),
    "zadar": (10, Condition.PARTLY_CLOUDY, 10, 70, 8),
    "osijek": (7, Condition.CLOUDY, 10, 72, 5),
}


def fallback_snapshot(city_key: str, rng: random.Random) -> CitySnapshot:
    """
    Build the built-in default snapshot for a configured city.

    Raises:
        KeyError: If the city has no fallback entry
    """
    temperature, condition, wind_speed, humidity, feels_like = FALLBACK_WEATHER[city_key]
    return CitySnapshot(
        city_key=city_key,
        location=CITIES[city_key].name,
        temperature=temperature,
        condition=condition,
        emoji=emoji_for(condition),
        wind_speed=wind_speed,
        humidity=clamp_humidity(humidity),
        feels_like=feels_like,
        message=dramatic_message(condition, rng),
        ascii_art=ascii_art(condition),
    )
