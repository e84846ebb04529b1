from core.data_models import ShortsScript
from core.prompt_builders import (
    build_image_prompt, build_narration_text, build_script_prompt, script_response_schema,
)


def _script(**overrides) -> ShortsScript:
    data = {"hook": "h", "body": "b", "conclusion": "c", "bgmPrompt": "m", "imagePrompts": []}
    data.update(overrides)
    return ShortsScript(**data)


def test_narration_text_inserts_sentence_breaks() -> None:
    assert build_narration_text(_script(hook="Hi", body="Body text", conclusion="Bye")) == "Hi. Body text. Bye."


def test_narration_text_keeps_existing_punctuation_and_skips_blanks() -> None:
    script = _script(hook="정말일까? ", body="", conclusion="꼭 해보세요!")

    assert build_narration_text(script) == "정말일까? 꼭 해보세요!"


def test_script_prompt_mentions_topic_and_count() -> None:
    prompt = build_script_prompt("붕어빵", 7)

    assert '"붕어빵"' in prompt
    assert "7개" in prompt


def test_script_schema_requires_every_field() -> None:
    schema = script_response_schema(3)

    assert set(schema.required) == {"hook", "body", "conclusion", "imagePrompts", "bgmPrompt"}
    assert "3 specific image prompts" in schema.properties["imagePrompts"].description


def test_image_prompt_prefixes_style() -> None:
    assert build_image_prompt("a cat", "Noir") == "Style: Noir. High quality, detailed: a cat"
