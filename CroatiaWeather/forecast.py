"""Five-day forecast built from upstream daily data or generated as a fallback."""
import random
from datetime import date, timedelta
from typing import Iterable, List

from conditions import condition_for_code, emoji_for
from weather_data import Condition, ForecastDay
from weather_provider import DailyForecast

FORECAST_DAYS = 5

MILD_CONDITIONS = [
    Condition.CLEAR,
    Condition.CLOUDY,
    Condition.RAIN,
    Condition.PARTLY_CLOUDY,
]


def forecast_from_daily(daily: Iterable[DailyForecast], limit: int = FORECAST_DAYS) -> List[ForecastDay]:
    """Convert upstream daily rows to forecast days, truncating temperatures."""
    forecast = []
    for row in daily:
        if len(forecast) >= limit:
            break
        condition = condition_for_code(row.weather_code)
        forecast.append(ForecastDay(
            day=row.day,
            high=int(row.temperature_max),
            low=int(row.temperature_min),
            condition=condition,
            emoji=emoji_for(condition),
        ))
    return forecast


def seasonal_condition(high: int, low: int, rng: random.Random) -> Condition:
    """
    Pick a condition that fits the temperatures.

    Below freezing is snow, near freezing is rain or cloud, anything milder
    is drawn uniformly from the common conditions.
    """
    if high < 4 or low < -2:
        return Condition.SNOW
    if high < 5:
        return rng.choice([Condition.RAIN, Condition.CLOUDY])
    return rng.choice(MILD_CONDITIONS)


def generate_forecast(rng: random.Random, start: date, days: int = FORECAST_DAYS) -> List[ForecastDay]:
    """Generate a plausible winter forecast starting the day after ``start``."""
    forecast = []
    for i in range(days):
        high = rng.randint(5, 19)
        low = rng.randint(-3, 0)
        condition = seasonal_condition(high, low, rng)
        forecast.append(ForecastDay(
            day=start + timedelta(days=i + 1),
            high=high,
            low=low,
            condition=condition,
            emoji=emoji_for(condition),
        ))
    return forecast
