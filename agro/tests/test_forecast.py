import httpx
import pytest

from agro.domain.Weather import WeatherCondition
from agro.logic.weather.forecast import (
    build_weather_days,
    fetch_forecast,
    map_weather_code,
    resolve_location,
)
from agro.utilities.config import FALLBACK_LAT, FALLBACK_LNG
from agro.utilities.constants import MSG_GEO_DENIED, MSG_GEO_UNSUPPORTED
from agro.utilities.errors import ForecastUnavailable

PAYLOAD = {
    "daily": {
        "time": ["2024-07-15", "2024-07-16", "2024-07-17"],
        "weather_code": [0, 61, 3],
        "temperature_2m_max": [29.5, 24.4, 22.0],
        "temperature_2m_min": [18.2, 16.5, 15.0],
        "wind_speed_10m_max": [12.0, 14.6, 38.0],
        "relative_humidity_2m_mean": [55.0, 80.4, 70.0],
        "precipitation_probability_max": [5, 85, 40],
    }
}


def test_weather_code_mapping():
    assert map_weather_code(0, 5) == WeatherCondition.SUNNY
    assert map_weather_code(2, 5) == WeatherCondition.CLOUDY
    assert map_weather_code(63, 5) == WeatherCondition.RAIN
    assert map_weather_code(71, 5) == WeatherCondition.CLOUDY
    # wind wins over any code
    assert map_weather_code(0, 31) == WeatherCondition.WINDY


def test_build_weather_days_labels_and_rounding():
    days = build_weather_days(PAYLOAD)
    assert [d.day for d in days] == ["Oggi", "Domani", "Mer"]
    assert days[0].temp == 30  # 29.5 rounds half up
    assert days[0].condition == WeatherCondition.SUNNY
    assert days[1].condition == WeatherCondition.RAIN
    assert days[1].rain_chance == 85
    assert days[2].condition == WeatherCondition.WINDY
    assert days[2].date == "2024-07-17"


def test_resolve_location_fallbacks():
    assert resolve_location(45.0, 9.0).notice is None
    denied = resolve_location(geo="denied")
    assert (denied.lat, denied.lng) == (FALLBACK_LAT, FALLBACK_LNG)
    assert denied.notice == MSG_GEO_DENIED
    assert resolve_location(geo="unsupported").notice == MSG_GEO_UNSUPPORTED


@pytest.mark.asyncio
async def test_fetch_forecast_sends_coordinates():
    seen = {}

    def handler(request: httpx.Request):
        seen.update(request.url.params)
        return httpx.Response(200, json=PAYLOAD)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        days = await fetch_forecast(resolve_location(45.46, 9.19), client)

    assert len(days) == 3
    assert seen["latitude"] == "45.46"
    assert seen["longitude"] == "9.19"
    assert seen["timezone"] == "auto"


@pytest.mark.asyncio
async def test_fetch_forecast_http_error_is_retryable_failure():
    transport = httpx.MockTransport(lambda request: httpx.Response(503))
    async with httpx.AsyncClient(transport=transport) as client:
        with pytest.raises(ForecastUnavailable):
            await fetch_forecast(resolve_location(geo="denied"), client)


@pytest.mark.asyncio
async def test_fetch_forecast_malformed_payload():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"hourly": {}}))
    async with httpx.AsyncClient(transport=transport) as client:
        with pytest.raises(ForecastUnavailable):
            await fetch_forecast(resolve_location(geo="denied"), client)
