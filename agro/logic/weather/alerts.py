"""Severe-weather notifications for today, at most one per kind per calendar day."""
from datetime import date
from typing import List, Optional, Sequence

from agro.domain.Session import Session
from agro.domain.Weather import WeatherDay
from agro.events.Event_Bus import GLOBAL_EVENT_BUS
from agro.events.event_helpers import publish_rain_alert, publish_wind_alert
from agro.utilities.constants import (
    ALERT_RAIN_BODY,
    ALERT_RAIN_CHANCE,
    ALERT_RAIN_TITLE,
    ALERT_WIND_BODY,
    ALERT_WIND_KMH,
    ALERT_WIND_TITLE,
)

__all__ = ["check_weather_alerts"]


def check_weather_alerts(session: Session, weather_days: Sequence[WeatherDay],
                         today: Optional[date] = None, bus=GLOBAL_EVENT_BUS) -> List[str]:
    """Publish rain/wind alerts for today's forecast.

    Nothing is sent unless notifications were granted. Returns the keys of the
    alerts fired by this call (``alert_rain_<date>``, ``alert_wind_<date>``).
    """
    if session.notification_permission != "granted" or not weather_days:
        return []
    day = (today or date.today()).isoformat()
    current = weather_days[0]
    fired = []

    rain_key = f"alert_rain_{day}"
    if current.rain_chance > ALERT_RAIN_CHANCE and rain_key not in session.alert_keys:
        publish_rain_alert(ALERT_RAIN_TITLE, ALERT_RAIN_BODY.format(rain_chance=f"{current.rain_chance:g}"),
                           current.rain_chance, day, bus=bus)
        session.alert_keys.add(rain_key)
        fired.append(rain_key)

    wind_key = f"alert_wind_{day}"
    if current.wind > ALERT_WIND_KMH and wind_key not in session.alert_keys:
        publish_wind_alert(ALERT_WIND_TITLE, ALERT_WIND_BODY.format(wind=current.wind), current.wind, day, bus=bus)
        session.alert_keys.add(wind_key)
        fired.append(wind_key)

    return fired
