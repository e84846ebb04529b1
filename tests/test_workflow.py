import pytest

from core.data_models import GeneratedContent, ShortsScript
from core.workflow import (
    ASSETS_ERROR, SCRIPT_ERROR, Completed, Editing, Idle, Workflow, WorkflowError, image_error,
)


def _script() -> ShortsScript:
    return ShortsScript(hook="h", body="b", conclusion="c", bgmPrompt="m", imagePrompts=["p1", "p2"])


def test_happy_path_is_linear() -> None:
    wf = Workflow()
    assert wf.kind == "idle"

    wf.begin_scripting("붕어빵")
    assert wf.kind == "scripting"
    assert wf.state.topic == "붕어빵"

    wf.script_ready(_script())
    assert isinstance(wf.state, Editing)

    script = wf.begin_assets()
    assert wf.kind == "generating_assets"
    assert script.hook == "h"

    wf.assets_ready(GeneratedContent(script=script, images=["a", "b"], audio=None))
    assert isinstance(wf.state, Completed)
    assert wf.state.content.images == ["a", "b"]


def test_script_failure_reverts_to_idle_with_message() -> None:
    wf = Workflow()
    wf.begin_scripting("x")

    wf.script_failed()

    assert isinstance(wf.state, Idle)
    assert wf.error == SCRIPT_ERROR


def test_asset_failure_reverts_to_editing_and_keeps_script() -> None:
    wf = Workflow()
    wf.begin_scripting("x")
    wf.script_ready(_script())
    wf.state.script.hook = "edited hook"
    wf.begin_assets()

    wf.assets_failed()

    assert isinstance(wf.state, Editing)
    assert wf.state.script.hook == "edited hook"
    assert wf.error == ASSETS_ERROR


def test_new_attempt_clears_previous_error() -> None:
    wf = Workflow()
    wf.begin_scripting("x")
    wf.script_failed()

    wf.begin_scripting("y")

    assert wf.error is None


def test_regeneration_error_is_reported_in_place() -> None:
    wf = Workflow()
    wf.open_content(GeneratedContent(script=_script(), images=["a", "b"], audio="QUFB"))

    wf.report_error(image_error(1))

    assert wf.kind == "completed"
    assert wf.error == "2번 이미지 재생성 중 오류가 발생했습니다."
    wf.dismiss_error()
    assert wf.error is None


@pytest.mark.parametrize("action", [
    lambda wf: wf.script_ready(_script()),
    lambda wf: wf.begin_assets(),
    lambda wf: wf.assets_failed(),
    lambda wf: wf.back_to_idle(),
    lambda wf: wf.update_content(GeneratedContent(script=_script(), images=["a", "b"])),
])
def test_illegal_transitions_from_idle_raise(action) -> None:
    wf = Workflow()

    with pytest.raises(WorkflowError):
        action(wf)
    assert wf.kind == "idle"


def test_back_to_idle_from_completed() -> None:
    wf = Workflow()
    wf.open_content(GeneratedContent(script=_script(), images=["a", "b"]))

    wf.back_to_idle()

    assert wf.kind == "idle"
