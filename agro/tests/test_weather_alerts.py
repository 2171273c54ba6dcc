from datetime import date

from agro.domain.Session import Session
from agro.domain.Weather import WeatherCondition, WeatherDay
from agro.events.Event_Bus import WEATHER_ALERT_RAIN, WEATHER_ALERT_WIND, EventBus
from agro.logic.weather.alerts import check_weather_alerts

TODAY = date(2024, 7, 15)


def _today(rain=10, wind=10):
    return [WeatherDay("Oggi", 25, 15, WeatherCondition.CLOUDY, wind, 60, rain, "2024-07-15")]


def _bus():
    bus = EventBus()
    received = []
    for name in (WEATHER_ALERT_RAIN, WEATHER_ALERT_WIND):
        bus.subscribe(name, lambda event, payload: received.append((event, payload)))
    return bus, received


def test_nothing_without_permission():
    bus, received = _bus()
    session = Session()
    assert check_weather_alerts(session, _today(rain=90, wind=50), TODAY, bus) == []
    assert received == []


def test_rain_and_wind_fire_once_per_day():
    bus, received = _bus()
    session = Session()
    session.notification_permission = "granted"

    fired = check_weather_alerts(session, _today(rain=85, wind=40), TODAY, bus)
    assert fired == ["alert_rain_2024-07-15", "alert_wind_2024-07-15"]
    assert [event for event, _ in received] == [WEATHER_ALERT_RAIN, WEATHER_ALERT_WIND]
    assert "85%" in received[0][1]["body"]
    assert "40 km/h" in received[1][1]["body"]

    assert check_weather_alerts(session, _today(rain=95, wind=60), TODAY, bus) == []
    assert len(received) == 2

    # next calendar day fires again
    assert check_weather_alerts(session, _today(rain=95), date(2024, 7, 16), bus) == ["alert_rain_2024-07-16"]


def test_thresholds_are_strict():
    bus, received = _bus()
    session = Session()
    session.notification_permission = "granted"
    assert check_weather_alerts(session, _today(rain=70, wind=35), TODAY, bus) == []
