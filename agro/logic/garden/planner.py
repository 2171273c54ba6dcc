"""Garden planning helpers: plant counts and the layout prompt."""
import math
from typing import List

from agro.domain.Garden import GardenDraft
from agro.utilities.constants import (
    LAYOUT_IMAGE_PROMPT,
    LAYOUT_PROMPT,
    PHOTO_CONTEXT_MISSING,
    PHOTO_CONTEXT_PROVIDED,
)

__all__ = ["plant_quantities", "build_layout_prompt", "build_layout_image_prompt"]


def plant_quantities(draft: GardenDraft) -> List[dict]:
    """How many plants of each selected vegetable fit the plot, area split evenly.

    plant area (m²) = spacing between plants (cm) / 100 * spacing between rows (cm) / 100
    """
    if not draft.has_dimensions or not draft.selected_plants:
        return []
    area = float(draft.width) * float(draft.length)
    if area == 0:
        return []
    share = area / len(draft.selected_plants)
    result = []
    for plant in draft.selected_plants:
        spacing = plant.spacing or {}
        plant_area = (spacing.get("plants", 0) / 100) * (spacing.get("rows", 0) / 100)
        quantity = math.floor(share / plant_area) if plant_area > 0 else 0
        result.append({"name": plant.name, "quantity": quantity, "spacing": dict(spacing)})
    return result


def _plants(draft: GardenDraft) -> str:
    return ", ".join(p.name for p in draft.selected_plants)


def build_layout_prompt(draft: GardenDraft) -> str:
    return LAYOUT_PROMPT.format(
        farming_system=draft.farming_system.name if draft.farming_system else "",
        cultivation_type=draft.cultivation_type or "",
        width=_fmt(draft.width),
        length=_fmt(draft.length),
        sun_exposure=draft.sun_exposure or "",
        plants=_plants(draft),
        photo_context=PHOTO_CONTEXT_PROVIDED if draft.photo else PHOTO_CONTEXT_MISSING,
    )


def build_layout_image_prompt(draft: GardenDraft) -> str:
    return LAYOUT_IMAGE_PROMPT.format(
        width=_fmt(draft.width),
        length=_fmt(draft.length),
        cultivation_type=draft.cultivation_type or "",
        sun_exposure=draft.sun_exposure or "",
        plants=_plants(draft),
    )


def _fmt(value) -> str:
    return f"{value:g}" if isinstance(value, (int, float)) else str(value or "")
