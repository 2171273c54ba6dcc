from fastapi import APIRouter, Body, Depends, File, UploadFile

from agro.api.api_ai import read_image_upload
from agro.api.context import AppContext, require_view
from agro.domain.Navigation import View
from agro.logic.garden.planner import plant_quantities
from agro.utilities.validators import GardenDimensionsInput, PlantSelectionInput
from agro.utilities.errors import WizardError

router = APIRouter(prefix="/api/garden")

garden_access = require_view(View.DESIGN_GARDEN)


def _state(ctx: AppContext):
    data = ctx.wizard.to_dict()
    if ctx.wizard.is_complete:
        data["plants"] = plant_quantities(ctx.wizard.draft)
    return data


@router.get("")
async def api_garden(ctx: AppContext = Depends(garden_access)):
    data = _state(ctx)
    data["farming_systems"] = [s.to_dict() for s in ctx.farming_systems]
    data["vegetables"] = [v.to_dict() for v in ctx.vegetable_database]
    return data


@router.post("/farming-system")
async def api_farming_system(name: str = Body(..., embed=True), ctx: AppContext = Depends(garden_access)):
    ctx.wizard.choose_farming_system(name)
    return _state(ctx)


@router.post("/cultivation-type")
async def api_cultivation_type(value: str = Body(..., embed=True), ctx: AppContext = Depends(garden_access)):
    ctx.wizard.choose_cultivation_type(value)
    return _state(ctx)


@router.post("/sun-exposure")
async def api_sun_exposure(value: str = Body(..., embed=True), ctx: AppContext = Depends(garden_access)):
    ctx.wizard.choose_sun_exposure(value)
    return _state(ctx)


@router.post("/plants")
async def api_add_plants(selection: PlantSelectionInput, ctx: AppContext = Depends(garden_access)):
    for name in selection.names:
        ctx.wizard.add_plant(name)
    return _state(ctx)


@router.delete("/plants/{name}")
async def api_remove_plant(name: str, ctx: AppContext = Depends(garden_access)):
    ctx.wizard.remove_plant(name)
    return _state(ctx)


@router.post("/dimensions")
async def api_dimensions(dimensions: GardenDimensionsInput, ctx: AppContext = Depends(garden_access)):
    ctx.wizard.set_dimensions(dimensions.width, dimensions.length)
    return _state(ctx)


@router.post("/photo")
async def api_photo(photo: UploadFile = File(...), ctx: AppContext = Depends(garden_access)):
    content = await read_image_upload(photo)
    ctx.wizard.set_photo(content, photo.content_type or "image/jpeg")
    return _state(ctx)


@router.post("/next")
async def api_next(ctx: AppContext = Depends(garden_access)):
    ctx.wizard.next()
    return _state(ctx)


@router.post("/back")
async def api_back(ctx: AppContext = Depends(garden_access)):
    ctx.wizard.back()
    return _state(ctx)


@router.post("/start-over")
async def api_start_over(ctx: AppContext = Depends(garden_access)):
    ctx.wizard.start_over()
    return _state(ctx)


@router.post("/layout")
async def api_layout(ctx: AppContext = Depends(garden_access)):
    """Generate the layout suggestion (text and sketch) for the completed draft."""
    if not ctx.wizard.is_complete:
        raise WizardError("Completa tutti i passaggi prima di generare il progetto.")
    layout = await ctx.ai.generate_layout(ctx.wizard.draft)
    return {"layout": layout, "plants": plant_quantities(ctx.wizard.draft)}
