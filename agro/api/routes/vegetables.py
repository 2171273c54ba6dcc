import logging

from fastapi import APIRouter, BackgroundTasks, Body, Depends, HTTPException, Query

from agro.api.context import AppContext, require_view
from agro.domain.Navigation import View
from agro.logic.catalog.vegetables import complete_vegetable_image, start_vegetable, suggest_vegetable_names

router = APIRouter()
logger = logging.getLogger(__name__)

vegetables_access = require_view(View.VEGETABLES)


@router.get("/api/vegetables")
async def api_vegetables(ctx: AppContext = Depends(vegetables_access)):
    return {"vegetables": ctx.vegetables.to_dict()}


@router.post("/api/vegetables", status_code=202)
async def api_add_vegetable(background: BackgroundTasks, payload: dict = Body(...),
                            ctx: AppContext = Depends(vegetables_access)):
    """Add a vegetable; its picture is generated after the response is sent.

    The placeholder carries a negative temporary id; poll /api/vegetables or
    /api/alerts for the final entry.
    """
    placeholder = start_vegetable(ctx.vegetables, payload)
    background.add_task(complete_vegetable_image, ctx.vegetables, placeholder.id,
                        placeholder.name, ctx.ai.generate_image)
    logger.info("Vegetable %r queued for image generation (temp id %d)", placeholder.name, placeholder.id)
    return {"status": "pending", "vegetable": placeholder.to_dict()}


@router.delete("/api/vegetables/{vegetable_id}")
async def api_delete_vegetable(vegetable_id: int, ctx: AppContext = Depends(vegetables_access)):
    if ctx.vegetables.get(vegetable_id) is None:
        raise HTTPException(status_code=404, detail="Ortaggio non trovato")
    ctx.vegetables.remove(vegetable_id)
    return {"status": "success"}


@router.get("/api/vegetables/suggest")
async def api_suggest_vegetables(q: str = Query(""), ctx: AppContext = Depends(vegetables_access)):
    return {"names": suggest_vegetable_names(ctx.vegetable_database, q)}


@router.get("/api/vegetables/reference")
async def api_vegetable_reference(ctx: AppContext = Depends(vegetables_access)):
    return {"vegetables": [info.to_dict() for info in ctx.vegetable_database]}
