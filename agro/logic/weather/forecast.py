"""7-day forecast from Open-Meteo, mapped to WeatherDay records."""
from __future__ import annotations

import logging
import math
from datetime import date, datetime
from typing import List, Optional

import httpx

from agro.domain.Weather import Location, WeatherCondition, WeatherDay
from agro.utilities.config import (
    FALLBACK_LAT,
    FALLBACK_LNG,
    FORECAST_API_URL,
    FORECAST_DAYS,
    FORECAST_TIMEOUT,
)
from agro.utilities.constants import (
    DAY_LABEL_TODAY,
    DAY_LABEL_TOMORROW,
    FORECAST_DAILY_FIELDS,
    IT_WEEKDAYS_SHORT,
    MSG_GEO_DENIED,
    MSG_GEO_UNSUPPORTED,
    MSG_WEATHER_UNAVAILABLE,
    WINDY_KMH,
    WMO_CLOUDY,
    WMO_RAIN,
    WMO_SUNNY,
)
from agro.utilities.errors import ForecastUnavailable

__all__ = [
    "map_weather_code", "day_label", "build_weather_days", "resolve_location", "fetch_forecast",
]

logger = logging.getLogger(__name__)


def _round(value) -> int:
    """Half-up rounding (2.5 -> 3)."""
    return int(math.floor(float(value) + 0.5))


def map_weather_code(code: int, wind: float) -> WeatherCondition:
    if wind > WINDY_KMH:
        return WeatherCondition.WINDY
    if code in WMO_SUNNY:
        return WeatherCondition.SUNNY
    if code in WMO_CLOUDY:
        return WeatherCondition.CLOUDY
    if code in WMO_RAIN:
        return WeatherCondition.RAIN
    return WeatherCondition.CLOUDY


def day_label(index: int, day: date) -> str:
    if index == 0:
        return DAY_LABEL_TODAY
    if index == 1:
        return DAY_LABEL_TOMORROW
    return IT_WEEKDAYS_SHORT[day.weekday()].capitalize()


def build_weather_days(payload: dict) -> List[WeatherDay]:
    """Zip the daily columns of an Open-Meteo response index-wise."""
    daily = payload["daily"]
    days = []
    for i, raw_date in enumerate(daily["time"]):
        wind = daily["wind_speed_10m_max"][i] or 0
        when = datetime.strptime(raw_date, "%Y-%m-%d").date()
        days.append(WeatherDay(
            day=day_label(i, when),
            date=raw_date,
            temp=_round(daily["temperature_2m_max"][i] or 0),
            temp_min=_round(daily["temperature_2m_min"][i] or 0),
            condition=map_weather_code(daily["weather_code"][i] or 0, wind),
            wind=_round(wind),
            humidity=_round(daily["relative_humidity_2m_mean"][i] or 0),
            rain_chance=daily["precipitation_probability_max"][i] or 0,
        ))
    return days


def resolve_location(lat: Optional[float] = None, lng: Optional[float] = None,
                     geo: Optional[str] = None) -> Location:
    """Coordinates reported by the browser, or Rome with a notice.

    geo: None when the browser supplied coordinates, "denied" when the
         lookup failed, "unsupported" when the browser has no geolocation.
    """
    if lat is not None and lng is not None and geo is None:
        return Location(lat, lng)
    if geo == "unsupported":
        return Location(FALLBACK_LAT, FALLBACK_LNG, MSG_GEO_UNSUPPORTED)
    return Location(FALLBACK_LAT, FALLBACK_LNG, MSG_GEO_DENIED)


async def fetch_forecast(location: Location, client: Optional[httpx.AsyncClient] = None) -> List[WeatherDay]:
    """Fetch the forecast for ``location``; raises ForecastUnavailable on any failure."""
    params = {
        "latitude": location.lat,
        "longitude": location.lng,
        "daily": FORECAST_DAILY_FIELDS,
        "timezone": "auto",
        "forecast_days": FORECAST_DAYS,
    }
    try:
        if client is None:
            async with httpx.AsyncClient(timeout=FORECAST_TIMEOUT) as own_client:
                response = await own_client.get(FORECAST_API_URL, params=params)
        else:
            response = await client.get(FORECAST_API_URL, params=params)
        response.raise_for_status()
        return build_weather_days(response.json())
    except httpx.HTTPError as e:
        logger.error("Forecast request failed for %.4f,%.4f: %s", location.lat, location.lng, e)
        raise ForecastUnavailable(MSG_WEATHER_UNAVAILABLE) from e
    except (KeyError, IndexError, TypeError, ValueError) as e:
        logger.exception("Malformed forecast payload")
        raise ForecastUnavailable(MSG_WEATHER_UNAVAILABLE) from e
