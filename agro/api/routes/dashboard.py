from fastapi import APIRouter, Depends, Query

from agro.api.context import AppContext, require_view
from agro.domain.Navigation import View
from agro.logic.access.plan_gate import is_view_allowed

router = APIRouter()

DASHBOARD_TASKS = 3
DASHBOARD_VEGETABLES = 4


def dashboard_summary(ctx: AppContext) -> dict:
    """Widgets of the home view; sections the plan does not unlock are omitted."""
    plan = ctx.session.plan
    summary = {
        "user": ctx.session.user.to_dict() if ctx.session.user else None,
        "plan": plan.value if plan else None,
        "show_notification_banner": ctx.session.show_notification_banner,
        "today": ctx.weather[0].to_dict() if ctx.weather else None,
        "suggestions": [s.to_dict() for s in ctx.suggestions],
    }
    if is_view_allowed(View.CHECKLIST, plan):
        summary["tasks"] = [t.to_dict() for t in ctx.tasks.pending()[:DASHBOARD_TASKS]]
    if is_view_allowed(View.VEGETABLES, plan):
        summary["vegetables"] = [v.to_dict() for v in ctx.vegetables.vegetables[:DASHBOARD_VEGETABLES]]
    return summary


@router.get("/api/dashboard")
async def api_dashboard(ctx: AppContext = Depends(require_view(View.DASHBOARD))):
    return dashboard_summary(ctx)


@router.get("/api/faq")
async def api_faq(q: str = Query(""), ctx: AppContext = Depends(require_view(View.FAQ))):
    """FAQ entries whose question or answer contains ``q`` (case-insensitive)."""
    faqs = ctx.seeds.faqs()
    term = q.strip().lower()
    if term:
        faqs = [f for f in faqs if term in f["question"].lower() or term in f["answer"].lower()]
    return {"faqs": faqs}
