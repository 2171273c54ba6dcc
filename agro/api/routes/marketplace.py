import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, Query

from agro.api.context import AppContext, require_view
from agro.domain.Navigation import View
from agro.utilities.constants import (
    MARKET_IMAGE_PROMPT,
    MSG_MARKET_IMAGE_EMPTY,
    MSG_MARKET_IMAGE_FAILED,
    MSG_MARKET_NAME_FIRST,
)
from agro.utilities.errors import AIUnavailable, GenerationFailed, ValidationFailed
from agro.utilities.validators import MarketplaceItemForm

router = APIRouter()
logger = logging.getLogger(__name__)

market_access = require_view(View.ECOMMERCE)


@router.get("/api/marketplace")
async def api_marketplace(type: Optional[str] = Query(None, pattern="^(equipment|produce)$"),
                          q: str = Query(""), ctx: AppContext = Depends(market_access)):
    return {"items": [i.to_dict() for i in ctx.marketplace.search(type, q)]}


@router.post("/api/marketplace")
async def api_add_item(payload: dict = Body(...), ctx: AppContext = Depends(market_access)):
    form = MarketplaceItemForm.parse(payload)
    item = ctx.marketplace.add_item(form.model_dump())
    return {"status": "success", "item": item.to_dict()}


@router.post("/api/marketplace/image")
async def api_item_image(payload: dict = Body(...), ctx: AppContext = Depends(market_access)):
    """Generate a listing photo from the item name and description."""
    name = (payload.get("name") or "").strip()
    if not name:
        raise ValidationFailed(MSG_MARKET_NAME_FIRST)
    prompt = MARKET_IMAGE_PROMPT.format(name=name, description=payload.get("description") or "")
    try:
        url = await ctx.ai.generate_image(prompt)
    except AIUnavailable:
        raise
    except Exception as e:
        logger.exception("Marketplace image generation failed for %r", name)
        raise GenerationFailed(MSG_MARKET_IMAGE_FAILED) from e
    if not url:
        raise GenerationFailed(MSG_MARKET_IMAGE_EMPTY)
    return {"image_url": url}
