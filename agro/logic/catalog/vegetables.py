"""Adding vegetables whose picture is generated asynchronously.

The placeholder is visible immediately; the image generator runs without
holding any lock, and its result is merged back by temporary id. Several
generations may be in flight and complete in any order.
"""
import logging
import time
from typing import Awaitable, Callable, Optional

from agro.domain.Vegetable import ImageFailed, ImageReady, Vegetable, VegetableCatalog
from agro.utilities.constants import ERROR_IMAGE_URL, FALLBACK_IMAGE_URL, VEGETABLE_IMAGE_PROMPT
from agro.utilities.validators import VegetableForm

__all__ = ["start_vegetable", "complete_vegetable_image", "add_vegetable", "suggest_vegetable_names"]

logger = logging.getLogger(__name__)

ImageGenerator = Callable[[str], Awaitable[Optional[str]]]


def start_vegetable(catalog: VegetableCatalog, draft: dict) -> Vegetable:
    """Validate ``draft`` and append a placeholder; raises ValidationFailed."""
    form = VegetableForm.parse(draft)
    return catalog.add_placeholder(form.name, form.planting_date, form.status)


async def complete_vegetable_image(catalog: VegetableCatalog, temp_id: int, name: str,
                                   generate_image: ImageGenerator) -> Optional[Vegetable]:
    """Run the image generator for placeholder ``temp_id`` and attach the result.

    An empty result falls back to a stock photo, an exception to the error
    photo; either way the vegetable gets its final id.
    """
    ts = int(time.time() * 1000)
    try:
        url = await generate_image(VEGETABLE_IMAGE_PROMPT.format(name=name))
        outcome = ImageReady(url) if url else ImageReady(FALLBACK_IMAGE_URL.format(ts=ts))
    except Exception as e:
        logger.exception("Image generation failed for %r", name)
        outcome = ImageFailed(ERROR_IMAGE_URL.format(ts=ts), str(e))
    async with catalog.lock:
        return catalog.resolve(temp_id, outcome)


async def add_vegetable(catalog: VegetableCatalog, draft: dict, generate_image: ImageGenerator) -> Optional[Vegetable]:
    placeholder = start_vegetable(catalog, draft)
    return await complete_vegetable_image(catalog, placeholder.id, placeholder.name, generate_image)


def suggest_vegetable_names(reference, text: str):
    """Reference catalog names containing ``text`` once more than one character is typed."""
    term = (text or "").strip().lower()
    if len(term) <= 1:
        return []
    return [info.name for info in reference if term in info.name.lower()]
