"""Weather domain model - pure data structures independent of any API."""
import threading
from dataclasses import dataclass, field
from datetime import date
from enum import Enum

HUMIDITY_MIN = 30
HUMIDITY_MAX = 99


class Condition(Enum):
    """Closed set of weather categories shown to users."""
    CLEAR = "Sunčano"
    PARTLY_CLOUDY = "Djelomično oblačno"
    CLOUDY = "Oblačno"
    FOG = "Magla"
    RAIN = "Kišno"
    SNOW = "Snježno"
    SHOWERS = "Pljuskovi"
    SNOW_SHOWERS = "Snježni pljuskovi"
    STORM = "Oluja"


class Trend(Enum):
    RISING = "rising"
    FALLING = "falling"
    STABLE = "stable"


def clamp_humidity(humidity: int) -> int:
    """Clamp a synthetically derived humidity into the plausible range."""
    return max(HUMIDITY_MIN, min(HUMIDITY_MAX, int(humidity)))


@dataclass(frozen=True)
class CitySnapshot:
    """Current weather for one city, as cached and served."""
    city_key: str
    location: str  # display name, e.g. "Zagreb 🏛️"
    temperature: int
    condition: Condition
    emoji: str
    wind_speed: int
    humidity: int
    feels_like: int
    message: str = ""
    ascii_art: str = ""

    def to_dict(self) -> dict:
        return {
            "location": self.location,
            "temperature": self.temperature,
            "condition": self.condition.value,
            "emoji": self.emoji,
            "description": self.ascii_art,
            "dramatic_message": self.message,
            "wind_speed": self.wind_speed,
            "humidity": self.humidity,
            "feels_like": self.feels_like,
        }


@dataclass
class CacheEntry:
    """
    A city's snapshot plus the time it was last refreshed.

    The snapshot is swapped as a whole while holding ``lock``, so a reader
    holding the same lock sees either the old or the new snapshot.
    """
    snapshot: CitySnapshot
    last_refreshed: float
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def age(self, now: float) -> float:
        return now - self.last_refreshed

    def is_stale(self, now: float, ttl_seconds: float) -> bool:
        """Check if this entry is older than ttl_seconds."""
        return self.age(now) > ttl_seconds


@dataclass(frozen=True)
class ForecastDay:
    day: date
    high: int
    low: int
    condition: Condition
    emoji: str

    def to_dict(self) -> dict:
        return {
            "date": self.day.isoformat(),
            "weekday": self.day.strftime("%A"),
            "high": self.high,
            "low": self.low,
            "condition": self.condition.value,
            "emoji": self.emoji,
        }
