import logging
import uuid
from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query

from agro.api.context import AppContext, get_context
from agro.domain.Subscription import SubscriptionPlan, plan_catalog
from agro.domain.User import User
from agro.events.web_observers import get_events
from agro.logic.access.plan_gate import visible_nav_items
from agro.utilities.validators import RegistrationForm

router = APIRouter()
logger = logging.getLogger(__name__)


def _parse_plan(value) -> SubscriptionPlan:
    plan = SubscriptionPlan.parse(value)
    if plan is None:
        raise HTTPException(status_code=400, detail="Piano non valido")
    return plan


@router.get("/api/session")
async def api_session(ctx: AppContext = Depends(get_context)):
    data = ctx.session.to_dict()
    data["logged_in"] = ctx.session.is_active
    data["show_notification_banner"] = ctx.session.show_notification_banner
    return data


@router.post("/api/register")
async def api_register(payload: dict = Body(...), ctx: AppContext = Depends(get_context)):
    """Register the farmer and start a session on the chosen plan (default Gratis)."""
    plan = _parse_plan(payload.get("plan") or SubscriptionPlan.GRATIS.value)
    form = RegistrationForm.parse(payload)
    user = User(
        id=uuid.uuid4().hex,
        name=form.name,
        surname=form.surname,
        address=form.address,
        email=form.email,
        company=form.company or None,
        specialization=form.specialization or None,
        website=form.website or None,
    )
    ctx.session.start(user, plan)
    ctx.save_session()
    logger.info("Registered %s on plan %s", user.email, plan.value)
    return {"status": "success", "user": user.to_dict(), "plan": plan.value}


@router.post("/api/plan")
async def api_change_plan(plan: str = Body(..., embed=True), ctx: AppContext = Depends(get_context)):
    if ctx.session.user is None:
        raise HTTPException(status_code=401, detail="Nessuna sessione attiva")
    ctx.session.change_plan(_parse_plan(plan))
    ctx.save_session()
    return {"status": "success", "plan": ctx.session.plan.value}


@router.post("/api/logout")
async def api_logout(ctx: AppContext = Depends(get_context)):
    ctx.logout()
    return {"status": "success"}


@router.get("/api/plans")
async def api_plans(ctx: AppContext = Depends(get_context)):
    current = ctx.session.plan.value if ctx.session.plan else None
    return {"current": current, "plans": plan_catalog()}


@router.get("/api/navigation")
async def api_navigation(ctx: AppContext = Depends(get_context)):
    return {"items": [item.to_dict() for item in visible_nav_items(ctx.session.plan)]}


@router.post("/api/notifications/permission")
async def api_notification_permission(permission: str = Body(..., embed=True),
                                      ctx: AppContext = Depends(get_context)):
    if permission not in ("default", "granted", "denied"):
        raise HTTPException(status_code=400, detail="Permesso non valido")
    ctx.session.notification_permission = permission
    return {"permission": permission, "show_notification_banner": ctx.session.show_notification_banner}


@router.post("/api/notifications/dismiss")
async def api_dismiss_banner(ctx: AppContext = Depends(get_context)):
    ctx.session.banner_dismissed = True
    return {"show_notification_banner": False}


@router.get("/api/alerts")
async def api_alerts(since: Optional[int] = Query(None)):
    """Recent notifications for polling clients (cursor based)."""
    return get_events(since)
