# core/gemini_image.py
# -*- coding: utf-8 -*-
import base64
import binascii
import io
import logging
from typing import Optional

from PIL import Image, UnidentifiedImageError
from google.genai import types

from core.gemini_helpers import GenerationError, first_inline_data, to_base64
from core.presets import resolve_models
from core.prompt_builders import build_image_prompt

logger = logging.getLogger(__name__)

_PLACEHOLDER_SIZES = {"9:16": (360, 640), "16:9": (640, 360), "1:1": (512, 512)}


def request_image(client, prompt: str, aspect_ratio: str, style: str,
                  model_name: Optional[str] = None) -> str:
    """
    One image via Gemini 2.5 Flash Image. Returns the raster as base64.
    Raises GenerationError when the response has no inline image.
    """
    if client is None:
        raise GenerationError("Gemini client is not initialised (missing API key?)")
    resp = client.models.generate_content(
        model=model_name or resolve_models().image_model,
        contents=build_image_prompt(prompt, style),
        config=types.GenerateContentConfig(
            image_config=types.ImageConfig(aspect_ratio=aspect_ratio),
        ),
    )
    data = first_inline_data(resp)
    if not data:
        raise GenerationError(
            "No image data in response. Check the image model name and that your "
            "API key has image-generation access."
        )
    return to_base64(data)


def generate_single_image(client, prompt: str, aspect_ratio: str, style: str,
                          model_name: Optional[str] = None, index: Optional[int] = None) -> str:
    """Batch variant: any failure yields the empty sentinel ""."""
    try:
        return request_image(client, prompt, aspect_ratio, style, model_name=model_name)
    except Exception:
        logger.exception("Image generation failed (slot %s)", index)
        return ""


def image_png_bytes(b64: str) -> bytes:
    """Decode an image payload and re-encode it as PNG (the model may return JPEG)."""
    if not b64:
        raise ValueError("empty image payload")
    try:
        raw = base64.b64decode(b64, validate=True)
        with Image.open(io.BytesIO(raw)) as img:
            out = io.BytesIO()
            img.save(out, format="PNG")
    except (binascii.Error, UnidentifiedImageError) as e:
        raise ValueError(f"image payload is not a decodable raster: {e}") from e
    return out.getvalue()


def placeholder_image(aspect_ratio: str = "9:16") -> Image.Image:
    """Neutral frame for empty slots (failed or missing images)."""
    size = _PLACEHOLDER_SIZES.get(aspect_ratio, _PLACEHOLDER_SIZES["9:16"])
    return Image.new("RGB", size, (226, 232, 240))
