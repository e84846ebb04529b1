# -*- coding: utf-8 -*-
"""
Script → images → narration pipeline on top of the Gemini client.

Per-request failures inside an asset batch are absorbed ("" for an image,
None for the narration) so one bad request never sinks the bundle.
Single-slot regeneration propagates errors instead: the caller keeps the
old bundle and reports the failure.
"""
import asyncio
import logging
from typing import Optional

from google.genai import errors as genai_errors
from google.genai import types
from pydantic import ValidationError

from core.data_models import GeneratedContent, ShortsScript
from core.gemini_helpers import (
    GenerationError, ScriptGenerationError, first_inline_data, gemini_json, to_base64,
)
from core.gemini_image import generate_single_image, request_image
from core.presets import MAX_IMAGE_COUNT, MIN_IMAGE_COUNT, resolve_models
from core.prompt_builders import (
    build_narration_text, build_script_prompt, build_tts_prompt, script_response_schema,
)

logger = logging.getLogger(__name__)


def generate_initial_script(client, topic: str, image_count: int,
                            model_name: Optional[str] = None) -> ShortsScript:
    topic = (topic or "").strip()
    if not topic:
        raise ValueError("topic is empty")
    if not MIN_IMAGE_COUNT <= image_count <= MAX_IMAGE_COUNT:
        raise ValueError(f"image_count must be {MIN_IMAGE_COUNT}..{MAX_IMAGE_COUNT}, got {image_count}")

    try:
        data = gemini_json(
            client,
            model_name or resolve_models().script_model,
            build_script_prompt(topic, image_count),
            schema=script_response_schema(image_count),
        )
    except (GenerationError, genai_errors.APIError) as e:
        raise ScriptGenerationError(f"script request failed: {e}") from e

    if not isinstance(data, dict):
        raise ScriptGenerationError(f"expected a JSON object, got {type(data).__name__}")
    try:
        script = ShortsScript.model_validate(data)
    except ValidationError as e:
        raise ScriptGenerationError(f"script does not match the expected fields: {e}") from e

    prompts = [p.strip() for p in script.image_prompts]
    if len(prompts) < image_count:
        raise ScriptGenerationError(
            f"model returned {len(prompts)} image prompts, {image_count} requested"
        )
    script.image_prompts = prompts[:image_count]
    logger.info("script ready: topic=%r images=%d", topic, image_count)
    return script


def request_narration(client, script: ShortsScript, model_name: Optional[str] = None,
                      voice: Optional[str] = None) -> str:
    """TTS for hook+body+conclusion. Returns base64 raw PCM (int16, mono, 24 kHz)."""
    if client is None:
        raise GenerationError("Gemini client is not initialised (missing API key?)")
    models = resolve_models()
    resp = client.models.generate_content(
        model=model_name or models.tts_model,
        contents=[types.Content(parts=[types.Part(text=build_tts_prompt(build_narration_text(script)))])],
        config=types.GenerateContentConfig(
            response_modalities=["AUDIO"],
            speech_config=types.SpeechConfig(
                voice_config=types.VoiceConfig(
                    prebuilt_voice_config=types.PrebuiltVoiceConfig(voice_name=voice or models.tts_voice),
                ),
            ),
        ),
    )
    data = first_inline_data(resp)
    if not data:
        raise GenerationError("TTS response has no audio data")
    return to_base64(data)


def regenerate_audio(client, script: ShortsScript) -> Optional[str]:
    """Batch variant: any failure yields None."""
    try:
        return request_narration(client, script)
    except Exception:
        logger.exception("Audio generation failed")
        return None


async def generate_assets(client, script: ShortsScript, aspect_ratio: str, style: str) -> GeneratedContent:
    """
    All image requests in parallel, joined, then the narration.
    The bundle always has one image slot per prompt.
    """
    snapshot = script.model_copy(deep=True)
    images = await asyncio.gather(*[
        asyncio.to_thread(generate_single_image, client, prompt, aspect_ratio, style, index=i)
        for i, prompt in enumerate(snapshot.image_prompts)
    ])
    audio = await asyncio.to_thread(regenerate_audio, client, snapshot)

    failed = sum(1 for img in images if not img)
    logger.info(
        "assets ready: %d/%d images, narration=%s",
        len(images) - failed, len(images), "yes" if audio else "no",
    )
    return GeneratedContent(
        script=snapshot,
        images=list(images),
        audio=audio,
        aspect_ratio=aspect_ratio,
    )


def run_generate_assets(client, script: ShortsScript, aspect_ratio: str, style: str) -> GeneratedContent:
    return asyncio.run(generate_assets(client, script, aspect_ratio, style))


def regenerate_image_slot(client, content: GeneratedContent, index: int, style: str) -> GeneratedContent:
    """New bundle with only images[index] replaced. Errors propagate."""
    if not 0 <= index < len(content.images):
        raise IndexError(f"image index {index} out of range (0..{len(content.images) - 1})")
    prompt = content.script.image_prompts[index]
    new_image = request_image(client, prompt, content.aspect_ratio, style)
    images = list(content.images)
    images[index] = new_image
    return content.model_copy(update={"images": images})


def regenerate_narration_slot(client, content: GeneratedContent) -> GeneratedContent:
    """New bundle with only the narration replaced, voiced from the current script."""
    audio = request_narration(client, content.script)
    return content.model_copy(update={"audio": audio})
