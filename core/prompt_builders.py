# -*- coding: utf-8 -*-
from google.genai import types

from core.data_models import ShortsScript

_SENTENCE_END = (".", "!", "?", "。", "…", "~")


def build_script_prompt(topic: str, image_count: int) -> str:
    """30-second shorts script: hook / body / conclusion + image prompts + BGM mood."""
    return f"""
주제: "{topic}"에 대한 30초짜리 쇼츠 대본을 만들어줘.
1. 후킹, 본문, 마침글을 나눠서 작성해줘.
2. 각 파트는 한 줄씩 자막으로 나오기 좋게 간결하게 작성해줘.
3. 각 장면에 어울리는 이미지 프롬프트 {image_count}개를 포함해줘.
4. 이 영상에 어울리는 배경음악(BGM)에 대한 간단한 묘사(영문 프롬프트)도 1개 작성해줘.
""".strip()


def script_response_schema(image_count: int) -> types.Schema:
    return types.Schema(
        type=types.Type.OBJECT,
        properties={
            "hook": types.Schema(type=types.Type.STRING),
            "body": types.Schema(type=types.Type.STRING),
            "conclusion": types.Schema(type=types.Type.STRING),
            "bgmPrompt": types.Schema(
                type=types.Type.STRING,
                description="BGM description for the mood",
            ),
            "imagePrompts": types.Schema(
                type=types.Type.ARRAY,
                items=types.Schema(type=types.Type.STRING),
                description=f"{image_count} specific image prompts for the scenes.",
            ),
        },
        required=["hook", "body", "conclusion", "imagePrompts", "bgmPrompt"],
    )


def build_image_prompt(prompt: str, style: str) -> str:
    return f"Style: {style}. High quality, detailed: {prompt}"


def build_narration_text(script: ShortsScript) -> str:
    """
    hook + body + conclusion as one utterance. Every part ends with sentence
    punctuation so the TTS pauses between them.
    """
    parts = []
    for raw in (script.hook, script.body, script.conclusion):
        t = (raw or "").strip()
        if not t:
            continue
        if not t.endswith(_SENTENCE_END):
            t += "."
        parts.append(t)
    return " ".join(parts)


def build_tts_prompt(text: str) -> str:
    return f"Say warmly and enthusiastically: {text}"
