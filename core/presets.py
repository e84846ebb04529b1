# -*- coding: utf-8 -*-
"""
Defaults and option lists for Shorts Pro Studio.
Model names can be overridden through the environment (.env).
"""
import os
from dataclasses import dataclass

DEFAULT_TOPIC = "겨울철 별미"
DEFAULT_IMAGE_COUNT = 5
MIN_IMAGE_COUNT = 1
MAX_IMAGE_COUNT = 20
DEFAULT_ASPECT_RATIO = "9:16"
DEFAULT_VISUAL_STYLE = "Cinematic Photography"

ASPECT_RATIOS = {
    "9:16": "9:16 (쇼츠/릴스)",
    "16:9": "16:9 (유튜브/가로)",
    "1:1": "1:1 (인스타그램)",
}

# Sidebar suggestions only; the style field is free text.
VISUAL_STYLES = [
    "Cinematic Photography",
    "4K Photography",
    "Cyberpunk",
    "Watercolor Illustration",
    "Studio Ghibli-like Anime",
    "Flat Vector Illustration",
    "Film Noir",
]

VIDEO_EXPORT_MESSAGE = (
    "현재 환경에서는 MP4 렌더링을 지원하지 않습니다. "
    "프리뷰 모드를 통해 영상을 확인해주세요!"
)


@dataclass(frozen=True)
class ModelSettings:
    script_model: str = "gemini-3-flash-preview"
    image_model: str = "gemini-2.5-flash-image"
    tts_model: str = "gemini-2.5-flash-preview-tts"
    tts_voice: str = "Kore"


def resolve_models() -> ModelSettings:
    base = ModelSettings()
    return ModelSettings(
        script_model=os.getenv("SHORTS_SCRIPT_MODEL", "") or base.script_model,
        image_model=os.getenv("SHORTS_IMAGE_MODEL", "") or base.image_model,
        tts_model=os.getenv("SHORTS_TTS_MODEL", "") or base.tts_model,
        tts_voice=os.getenv("SHORTS_TTS_VOICE", "") or base.tts_voice,
    )
