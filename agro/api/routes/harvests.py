from fastapi import APIRouter, Body, Depends, Query

from agro.api.context import AppContext, require_view
from agro.domain.Navigation import View
from agro.logic.reporting.harvests import monthly_harvest_chart
from agro.utilities.validators import HarvestForm

router = APIRouter()

harvests_access = require_view(View.HARVESTS)


@router.get("/api/harvests")
async def api_harvests(unit: str = Query("kg", pattern="^(kg|g|pezzi)$"),
                       ctx: AppContext = Depends(harvests_access)):
    return {
        "harvests": ctx.harvests.to_dict(),
        "chart": monthly_harvest_chart(ctx.harvests.harvests, unit),
    }


@router.post("/api/harvests")
async def api_add_harvest(payload: dict = Body(...), ctx: AppContext = Depends(harvests_access)):
    form = HarvestForm.parse(payload)
    harvest = ctx.harvests.add_harvest(form.model_dump(), ctx.vegetables.vegetables)
    return {"status": "success", "harvest": harvest.to_dict()}
