from datetime import date as _date
from datetime import datetime
import logging
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates

from agro.api.api_ai import OpenAIServices
from agro.api.api_ai import router as ai_router
from agro.api.context import AppContext, get_context
from agro.api.routes import (
    cashflow,
    checklist,
    community,
    dashboard,
    garden,
    harvests,
    marketplace,
    session,
    vegetables,
    weather,
)
from agro.api.routes.dashboard import dashboard_summary
from agro.events.web_observers import start as start_event_observers
from agro.infra.Seed_Repository import SeedRepository
from agro.infra.Session_Repository import SessionRepository
from agro.logic.access.plan_gate import visible_nav_items
from agro.utilities.config import TEMPLATES_DIR
from agro.utilities.errors import (
    AgroError,
    AIUnavailable,
    ForecastUnavailable,
    GenerationFailed,
)

# Logging
logger = logging.getLogger("agro_app")

# Templates
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

ROUTERS = (
    session.router,
    dashboard.router,
    weather.router,
    checklist.router,
    vegetables.router,
    harvests.router,
    cashflow.router,
    marketplace.router,
    community.router,
    garden.router,
    ai_router,
)


def _ts() -> int:
    """Cache-busting timestamp for static assets."""
    return int(datetime.now().timestamp())


async def _agro_error(request: Request, exc: AgroError):
    # ValidationFailed, WizardError and anything else the farmer can fix
    return JSONResponse(status_code=400, content={"error": str(exc)})


async def _ai_unavailable(request: Request, exc: AIUnavailable):
    return JSONResponse(status_code=503, content={"error": str(exc)})


async def _generation_failed(request: Request, exc: GenerationFailed):
    return JSONResponse(status_code=502, content={"error": str(exc)})


async def _forecast_unavailable(request: Request, exc: ForecastUnavailable):
    return JSONResponse(status_code=502, content={"error": str(exc), "retry": True})


def create_app(context: Optional[AppContext] = None) -> FastAPI:
    """Build the application; tests pass their own context (fake AI, temp session file)."""
    app = FastAPI(title="AgroIO - Dashboard per l'agricoltore")
    app.state.context = context or AppContext(SeedRepository(), SessionRepository(), ai=OpenAIServices())

    for router in ROUTERS:
        app.include_router(router)

    app.add_exception_handler(AgroError, _agro_error)
    app.add_exception_handler(AIUnavailable, _ai_unavailable)
    app.add_exception_handler(GenerationFailed, _generation_failed)
    app.add_exception_handler(ForecastUnavailable, _forecast_unavailable)

    @app.on_event("startup")
    def _startup_web_observers():
        """Register event bus subscribers for web alerts when the app starts."""
        start_event_observers()
        logger.info("Web observers for weather and vegetable events started")

    @app.on_event("shutdown")
    async def _shutdown_context():
        ctx = app.state.context
        ctx.close()
        if ctx.http_client is not None:
            await ctx.http_client.aclose()
        logger.info("Application context closed")

    @app.get("/", response_class=HTMLResponse)
    def main_page(request: Request, ctx: AppContext = Depends(get_context)):
        return templates.TemplateResponse(
            request,
            "dashboard.html",
            {
                "logged_in": ctx.session.is_active,
                "nav_items": [item.to_dict() for item in visible_nav_items(ctx.session.plan)],
                "summary": dashboard_summary(ctx),
                "current_date": _date.today().strftime("%d.%m.%Y"),
                "time": _ts(),
            },
        )

    return app


app = create_app()
