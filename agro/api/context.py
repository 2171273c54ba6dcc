"""Application context: the in-memory farm state shared by all routes.

One AppContext lives on ``app.state.context``; routes receive it through the
``get_context`` / ``require_view`` dependencies.
"""
import logging
from typing import List, Optional

import httpx
from fastapi import Depends, HTTPException, Request

from agro.domain.Garden import GardenWizard
from agro.domain.Navigation import REQUIRED_PLAN, View
from agro.domain.Task import TaskSuggestion
from agro.domain.Weather import Location, WeatherDay
from agro.infra.Seed_Repository import SeedRepository
from agro.infra.Session_Repository import SessionRepository
from agro.logic.access.plan_gate import is_view_allowed

logger = logging.getLogger(__name__)


class AppContext:
    def __init__(self, seeds: SeedRepository, sessions: SessionRepository, ai=None,
                 http_client: Optional[httpx.AsyncClient] = None):
        self.seeds = seeds
        self.sessions = sessions
        self.ai = ai
        self.http_client = http_client
        self.session = sessions.load()
        self.weather: List[WeatherDay] = []
        self.location: Optional[Location] = None
        self.suggestions: List[TaskSuggestion] = []
        self.reset_data()

    def reset_data(self):
        '''
        Reloads every farm aggregate from the demo data.
        '''
        self.vegetables = self.seeds.vegetables()
        self.tasks = self.seeds.tasks()
        self.cash_book = self.seeds.cash_book()
        self.harvests = self.seeds.harvests()
        self.marketplace = self.seeds.marketplace()
        self.community = self.seeds.community_board()
        self.vegetable_database = self.seeds.vegetable_database()
        self.farming_systems = self.seeds.farming_systems()
        self.wizard = GardenWizard(self.farming_systems, self.vegetable_database)

    def save_session(self):
        self.sessions.save(self.session)

    def logout(self):
        self.session.logout()
        self.sessions.clear()
        logger.info("Session closed")

    def close(self):
        self.vegetables.close()


def get_context(request: Request) -> AppContext:
    return request.app.state.context


def require_view(view: View):
    """Dependency factory: 403 unless the session plan unlocks ``view``."""

    def dependency(ctx: AppContext = Depends(get_context)) -> AppContext:
        if not is_view_allowed(view, ctx.session.plan):
            required = REQUIRED_PLAN[view]
            raise HTTPException(status_code=403, detail={
                "error": f"La sezione '{view.value}' non è inclusa nel tuo piano.",
                "view": view.value,
                "required_plan": getattr(required, "value", required),
                "upgrade": "/api/plans",
            })
        return ctx

    return dependency
