# -*- coding: utf-8 -*-
"""
Linear workflow: idle → scripting → editing → generating_assets → completed.

Each state is its own model so the payload a view needs (editable script,
finished bundle) is always present in that state.
"""
import logging
from typing import Literal, Optional, Union

from pydantic import BaseModel

from core.data_models import GeneratedContent, ShortsScript

logger = logging.getLogger(__name__)

SCRIPT_ERROR = "대본 생성 중 오류가 발생했습니다."
ASSETS_ERROR = "이미지 및 음성 생성 중 오류가 발생했습니다."
AUDIO_ERROR = "음성 재녹음 중 오류가 발생했습니다."


def image_error(index: int) -> str:
    return f"{index + 1}번 이미지 재생성 중 오류가 발생했습니다."


class WorkflowError(RuntimeError):
    pass


class Idle(BaseModel):
    kind: Literal["idle"] = "idle"


class Scripting(BaseModel):
    kind: Literal["scripting"] = "scripting"
    topic: str


class Editing(BaseModel):
    kind: Literal["editing"] = "editing"
    script: ShortsScript


class GeneratingAssets(BaseModel):
    kind: Literal["generating_assets"] = "generating_assets"
    script: ShortsScript


class Completed(BaseModel):
    kind: Literal["completed"] = "completed"
    content: GeneratedContent


WorkflowState = Union[Idle, Scripting, Editing, GeneratingAssets, Completed]


class Workflow:
    def __init__(self):
        self.state: WorkflowState = Idle()
        self.error: Optional[str] = None

    @property
    def kind(self) -> str:
        return self.state.kind

    def _expect(self, *kinds: type) -> None:
        if not isinstance(self.state, kinds):
            names = "/".join(k.__name__ for k in kinds)
            raise WorkflowError(f"cannot do that from {self.kind!r} (needs {names})")

    def _go(self, state: WorkflowState) -> None:
        logger.debug("workflow %s → %s", self.kind, state.kind)
        self.state = state

    # --- errors ---
    def report_error(self, message: str) -> None:
        self.error = message

    def dismiss_error(self) -> None:
        self.error = None

    # --- transitions ---
    def begin_scripting(self, topic: str) -> None:
        self._expect(Idle)
        self.error = None
        self._go(Scripting(topic=topic))

    def script_ready(self, script: ShortsScript) -> None:
        self._expect(Scripting)
        self._go(Editing(script=script))

    def script_failed(self, message: str = SCRIPT_ERROR) -> None:
        self._expect(Scripting)
        self.error = message
        self._go(Idle())

    def begin_assets(self) -> ShortsScript:
        self._expect(Editing)
        script = self.state.script
        self.error = None
        self._go(GeneratingAssets(script=script))
        return script

    def assets_ready(self, content: GeneratedContent) -> None:
        self._expect(GeneratingAssets)
        self._go(Completed(content=content))

    def assets_failed(self, message: str = ASSETS_ERROR) -> None:
        self._expect(GeneratingAssets)
        self.error = message
        self._go(Editing(script=self.state.script))

    def update_content(self, content: GeneratedContent) -> None:
        self._expect(Completed)
        self.state = Completed(content=content)

    def back_to_idle(self) -> None:
        self._expect(Editing, Completed)
        self._go(Idle())

    def new_project(self) -> None:
        self.error = None
        self._go(Idle())

    def open_content(self, content: GeneratedContent) -> None:
        """Jump straight to the completed view with a saved bundle."""
        self.error = None
        self._go(Completed(content=content))
