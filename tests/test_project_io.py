import base64
import io
import json
import zipfile

import pytest
from PIL import Image
from pydantic import ValidationError

from core.data_models import GeneratedContent, ShortsScript
from core.project_io import export_zip, list_projects, load_project, save_project


def _jpeg_b64() -> str:
    buf = io.BytesIO()
    Image.new("RGB", (8, 16), (200, 30, 30)).save(buf, format="JPEG")
    return base64.b64encode(buf.getvalue()).decode()


def _content() -> GeneratedContent:
    script = ShortsScript(
        hook="h", body="b", conclusion="c", bgmPrompt="m", imagePrompts=["p1", "p2", "p3"],
    )
    return GeneratedContent(
        script=script,
        images=[_jpeg_b64(), "", _jpeg_b64()],
        audio=base64.b64encode(b"\x00\x00\x01\x00").decode(),
        aspectRatio="16:9",
    )


def test_save_and_load_roundtrip(tmp_path) -> None:
    content = _content()

    path = save_project(content, "겨울철 별미!", data_dir=tmp_path)
    loaded = load_project(path.name, data_dir=tmp_path)

    assert path.name == "겨울철_별미.json"
    assert loaded == content
    raw = json.loads(path.read_text(encoding="utf-8"))
    assert raw["aspectRatio"] == "16:9"
    assert raw["script"]["imagePrompts"] == ["p1", "p2", "p3"]
    assert list_projects(tmp_path) == [path]


def test_list_projects_missing_dir(tmp_path) -> None:
    assert list_projects(tmp_path / "nope") == []


def test_export_zip_contains_script_audio_and_nonempty_scenes() -> None:
    with zipfile.ZipFile(io.BytesIO(export_zip(_content()))) as z:
        names = sorted(z.namelist())
        assert names == ["narration.wav", "scene_01.png", "scene_03.png", "script.json"]
        assert z.read("scene_01.png")[:8] == b"\x89PNG\r\n\x1a\n"
        assert z.read("narration.wav")[:4] == b"RIFF"
        assert json.loads(z.read("script.json"))["bgmPrompt"] == "m"


def test_export_zip_skips_invalid_audio() -> None:
    content = _content().model_copy(update={"audio": "%%%"})

    with zipfile.ZipFile(io.BytesIO(export_zip(content))) as z:
        assert "narration.wav" not in z.namelist()


def test_load_rejects_bundle_with_mismatched_image_count(tmp_path) -> None:
    raw = _content().model_dump(by_alias=True)
    raw["images"] = raw["images"][:1]
    (tmp_path / "broken.json").write_text(json.dumps(raw), encoding="utf-8")

    with pytest.raises(ValidationError, match="image slots"):
        load_project("broken.json", data_dir=tmp_path)


def test_bundle_requires_one_image_slot_per_prompt() -> None:
    script = ShortsScript(hook="h", body="b", conclusion="c", bgmPrompt="m", imagePrompts=["p1"])

    with pytest.raises(ValidationError):
        GeneratedContent(script=script, images=["a", "b", "c"])
    assert GeneratedContent(script=script, images=[""]).images == [""]
