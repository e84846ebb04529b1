from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

AspectRatio = Literal["9:16", "16:9", "1:1"]


class Segment(str, Enum):
    HOOK = "hook"
    BODY = "body"
    CONCLUSION = "conclusion"


SEGMENT_FIELDS = tuple(s.value for s in Segment)


class ShortsScript(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    hook: str
    body: str
    conclusion: str
    bgm_prompt: str = Field(alias="bgmPrompt")
    image_prompts: List[str] = Field(alias="imagePrompts")

    def segment_text(self, segment: Segment) -> str:
        return getattr(self, Segment(segment).value)


class GeneratedContent(BaseModel):
    """Asset bundle: script snapshot + images (base64, "" = failed) + narration PCM (base64)."""
    model_config = ConfigDict(populate_by_name=True)

    script: ShortsScript
    images: List[str] = []
    audio: Optional[str] = None
    aspect_ratio: AspectRatio = Field(default="9:16", alias="aspectRatio")

    @model_validator(mode="after")
    def _one_image_slot_per_prompt(self):
        if len(self.images) != len(self.script.image_prompts):
            raise ValueError(
                f"bundle has {len(self.images)} image slots for {len(self.script.image_prompts)} prompts"
            )
        return self
