import logging

from fastapi import APIRouter, Body, Depends

from agro.api.context import AppContext, require_view
from agro.domain.Garden import VegetableInfo
from agro.domain.Navigation import View
from agro.utilities.constants import CATALOG_IMAGE_PROMPT
from agro.utilities.errors import AIUnavailable, GenerationFailed
from agro.utilities.validators import CatalogContributionForm

router = APIRouter(prefix="/api/community")
logger = logging.getLogger(__name__)

community_access = require_view(View.COMMUNITY)

MSG_CONTRIBUTION_FAILED = "Impossibile generare la scheda del prodotto. Riprova."


@router.get("/posts")
async def api_posts(ctx: AppContext = Depends(community_access)):
    return {"posts": [p.to_dict() for p in ctx.community.posts]}


@router.get("/map")
async def api_map(ctx: AppContext = Depends(community_access)):
    """AgroHunter: partner stores and fellow farmers."""
    return {"points": ctx.community.map_points()}


@router.post("/contribute")
async def api_contribute(payload: dict = Body(...), ctx: AppContext = Depends(community_access)):
    """Preview a catalog card for a proposed vegetable, with a generated photo."""
    form = CatalogContributionForm.parse(payload)
    info = VegetableInfo(
        name=form.name, family=form.family, exposure=form.exposure, watering=form.watering,
        spacing={"plants": form.plants, "rows": form.rows}, sowing=form.sowing, harvest=form.harvest,
        companions=form.companions, avoid=form.avoid, yield_=form.yield_,
    )
    try:
        url = await ctx.ai.generate_image(CATALOG_IMAGE_PROMPT.format(name=form.name, description=form.describe()))
    except AIUnavailable:
        raise
    except Exception as e:
        logger.exception("Catalog image generation failed for %r", form.name)
        raise GenerationFailed(MSG_CONTRIBUTION_FAILED) from e
    if not url:
        raise GenerationFailed(MSG_CONTRIBUTION_FAILED)
    return {"info": info.to_dict(), "image_url": url}
