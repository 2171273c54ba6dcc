import base64
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile
from openai import AsyncOpenAI, OpenAIError

from agro.api.context import AppContext, require_view
from agro.domain.Garden import GardenDraft
from agro.domain.Navigation import View
from agro.logic.garden.planner import build_layout_image_prompt, build_layout_prompt
from agro.utilities import config
from agro.utilities.constants import (
    DIAGNOSIS_PROMPT,
    MAX_IMAGE_BYTES,
    MSG_AI_DISABLED,
    MSG_DIAGNOSIS_FAILED,
    MSG_IMAGE_TOO_LARGE,
    MSG_LAYOUT_EMPTY,
    MSG_LAYOUT_FAILED,
)
from agro.utilities.errors import AIUnavailable, GenerationFailed, ValidationFailed

logger = logging.getLogger(__name__)
router = APIRouter()


# === Helper: Get OpenAI Client ===
def _get_openai_client() -> Optional[AsyncOpenAI]:
    """Return an async OpenAI client if OPENAI_API_KEY is set, otherwise None."""
    api_key = config.OPENAI_API_KEY
    if not api_key:
        return None
    return AsyncOpenAI(api_key=api_key)


def _require_client() -> AsyncOpenAI:
    client = _get_openai_client()
    if client is None:
        logger.warning("OPENAI_API_KEY not set, AI features are disabled.")
        raise AIUnavailable(MSG_AI_DISABLED)
    return client


def _data_url(content: bytes, mime: str) -> str:
    return f"data:{mime};base64,{base64.b64encode(content).decode('ascii')}"


def _image_result_url(result) -> Optional[str]:
    """First image of an Images API response as a URL (data URL for base64 payloads)."""
    if not result or not result.data:
        return None
    first = result.data[0]
    if getattr(first, "b64_json", None):
        return f"data:image/png;base64,{first.b64_json}"
    return getattr(first, "url", None) or None


# === Image synthesis (vegetables, marketplace, catalog) ===
async def generate_image(prompt: str) -> Optional[str]:
    """Generate one picture for ``prompt``; None when the model returned no image."""
    client = _require_client()
    result = await client.images.generate(model=config.OPENAI_IMAGE_MODEL, prompt=prompt, size="1024x1024")
    return _image_result_url(result)


# === Plant diagnosis ===
async def diagnose_plant(content: bytes, mime: str) -> str:
    """Markdown diagnosis with the three mandatory bold sections."""
    client = _require_client()
    try:
        response = await client.responses.create(
            model=config.OPENAI_TEXT_MODEL,
            input=[{
                "role": "user",
                "content": [
                    {"type": "input_text", "text": DIAGNOSIS_PROMPT},
                    {"type": "input_image", "image_url": _data_url(content, mime)},
                ],
            }],
        )
    except OpenAIError as e:
        logger.exception("Plant diagnosis failed")
        raise GenerationFailed(MSG_DIAGNOSIS_FAILED) from e
    text = (response.output_text or "").strip()
    if not text:
        logger.warning("AI returned an empty diagnosis")
        raise GenerationFailed(MSG_DIAGNOSIS_FAILED)
    return text


# === Garden layout ===
async def generate_layout(draft: GardenDraft) -> dict:
    """Text layout plus a sketch; the sketch is drawn over the photo when one was given."""
    client = _require_client()
    try:
        response = await client.responses.create(model=config.OPENAI_TEXT_MODEL, input=build_layout_prompt(draft))
        if draft.photo:
            picture = await client.images.edit(
                model=config.OPENAI_IMAGE_MODEL,
                image=("garden", draft.photo, draft.photo_mime or "image/png"),
                prompt=build_layout_image_prompt(draft),
            )
        else:
            picture = await client.images.generate(
                model=config.OPENAI_IMAGE_MODEL, prompt=build_layout_image_prompt(draft), size="1024x1024"
            )
    except OpenAIError as e:
        logger.exception("Garden layout generation failed")
        raise GenerationFailed(MSG_LAYOUT_FAILED) from e

    text = (response.output_text or "").strip()
    image = _image_result_url(picture)
    if not text and not image:
        raise GenerationFailed(MSG_LAYOUT_EMPTY)
    return {"text": text, "image": image}


async def read_image_upload(upload: UploadFile) -> bytes:
    """Read an uploaded picture, rejecting files over the 5MB limit."""
    content = await upload.read()
    if len(content) > MAX_IMAGE_BYTES:
        raise ValidationFailed(MSG_IMAGE_TOO_LARGE)
    return content


@router.post("/api/gardener/diagnose")
async def api_diagnose(image: UploadFile = File(...),
                       ctx: AppContext = Depends(require_view(View.AGROGARDENER))):
    content = await read_image_upload(image)
    analysis = await ctx.ai.diagnose_plant(content, image.content_type or "image/jpeg")
    return {"analysis": analysis}


class OpenAIServices:
    """The generative calls used by the routes; tests substitute fakes on the app context."""
    generate_image = staticmethod(generate_image)
    diagnose_plant = staticmethod(diagnose_plant)
    generate_layout = staticmethod(generate_layout)
