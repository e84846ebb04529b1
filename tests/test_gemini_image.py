import base64
import io
from types import SimpleNamespace

import pytest
from PIL import Image

from core.gemini_helpers import GenerationError, parse_json_text
from core.gemini_image import (
    generate_single_image, image_png_bytes, placeholder_image, request_image,
)


class DummyModels:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error

    def generate_content(self, model, contents, config=None):
        if self.error:
            raise self.error
        return self.response


def _client(**kwargs):
    return SimpleNamespace(models=DummyModels(**kwargs))


def _parts(*parts):
    return SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=list(parts)))])


def test_request_image_picks_first_inline_part() -> None:
    resp = _parts(
        SimpleNamespace(inline_data=None, text="here you go"),
        SimpleNamespace(inline_data=SimpleNamespace(data=b"PNGDATA")),
    )

    assert request_image(_client(response=resp), "cat", "1:1", "Flat") == base64.b64encode(b"PNGDATA").decode()


def test_request_image_without_image_part_raises() -> None:
    resp = _parts(SimpleNamespace(inline_data=None, text="I cannot draw that"))

    with pytest.raises(GenerationError):
        request_image(_client(response=resp), "cat", "1:1", "Flat")


def test_request_image_without_client_raises() -> None:
    with pytest.raises(GenerationError):
        request_image(None, "cat", "1:1", "Flat")


def test_generate_single_image_swallows_failures() -> None:
    assert generate_single_image(_client(error=RuntimeError("503")), "cat", "9:16", "Flat", index=2) == ""


def test_image_png_bytes_converts_jpeg() -> None:
    buf = io.BytesIO()
    Image.new("RGB", (4, 4), (0, 0, 255)).save(buf, format="JPEG")

    png = image_png_bytes(base64.b64encode(buf.getvalue()).decode())

    assert png[:8] == b"\x89PNG\r\n\x1a\n"


@pytest.mark.parametrize("payload", ["", "!!!", base64.b64encode(b"not an image").decode()])
def test_image_png_bytes_rejects_bad_payloads(payload) -> None:
    with pytest.raises(ValueError):
        image_png_bytes(payload)


def test_placeholder_image_follows_aspect_ratio() -> None:
    assert placeholder_image("9:16").size == (360, 640)
    assert placeholder_image("16:9").size == (640, 360)
    assert placeholder_image("unknown").size == (360, 640)


def test_parse_json_text_finds_embedded_object() -> None:
    assert parse_json_text('Sure! {"hook": "h"} hope it helps') == {"hook": "h"}


def test_parse_json_text_raises_when_no_json() -> None:
    with pytest.raises(GenerationError):
        parse_json_text("no json here")
