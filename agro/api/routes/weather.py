import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from agro.api.context import AppContext, require_view
from agro.domain.Navigation import View
from agro.logic.weather.alerts import check_weather_alerts
from agro.logic.weather.forecast import fetch_forecast, resolve_location
from agro.logic.weather.suggestions import generate_task_suggestions

router = APIRouter()
logger = logging.getLogger(__name__)


async def refresh_weather(ctx: AppContext, lat: Optional[float], lon: Optional[float], geo: Optional[str]):
    """Fetch the forecast, then recompute suggestions and today's alerts.

    Raises ForecastUnavailable; the previous forecast is kept in that case.
    """
    location = resolve_location(lat, lon, geo)
    days = await fetch_forecast(location, ctx.http_client)
    ctx.location = location
    ctx.weather = days
    ctx.suggestions = generate_task_suggestions(days)
    fired = check_weather_alerts(ctx.session, days)
    if fired:
        logger.info("Weather alerts sent: %s", ", ".join(fired))
    return days


@router.get("/api/weather")
async def api_weather(lat: Optional[float] = Query(None), lon: Optional[float] = Query(None),
                      geo: Optional[str] = Query(None, pattern="^(denied|unsupported)$"),
                      ctx: AppContext = Depends(require_view(View.WEATHER))):
    days = await refresh_weather(ctx, lat, lon, geo)
    return {
        "location": ctx.location.to_dict(),
        "notice": ctx.location.notice,
        "days": [d.to_dict() for d in days],
        "suggestions": [s.to_dict() for s in ctx.suggestions],
    }
