import base64
import json
import re
from typing import Any, Optional

from google.genai import types


class GenerationError(RuntimeError):
    """A Gemini request failed or returned nothing usable."""


class ScriptGenerationError(GenerationError):
    pass


def parse_json_text(txt: str) -> Any:
    txt = (txt or "").strip()
    try:
        return json.loads(txt)
    except json.JSONDecodeError:
        pass
    m = re.search(r"```json\s*(\{.*?\}|\[.*?\])\s*```", txt, flags=re.S | re.I)
    if m:
        try:
            return json.loads(m.group(1))
        except json.JSONDecodeError:
            pass
    m2 = re.search(r"(\{.*\}|\[.*\])", txt, flags=re.S)
    if m2:
        try:
            return json.loads(m2.group(1))
        except json.JSONDecodeError:
            pass
    raise GenerationError(f"model did not return JSON: {txt[:120]!r}")


def gemini_json(client, model: str, prompt: str, schema: Optional[types.Schema] = None) -> Any:
    if client is None:
        raise GenerationError("Gemini client is not initialised (missing API key?)")
    resp = client.models.generate_content(
        model=model,
        contents=prompt,
        config=types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=schema,
        ),
    )
    return parse_json_text(resp.text)


def first_inline_data(resp) -> Optional[bytes]:
    """First non-empty inline_data payload of candidates[0], or None."""
    candidates = getattr(resp, "candidates", None) or []
    if not candidates:
        return None
    content = getattr(candidates[0], "content", None)
    for p in getattr(content, "parts", None) or []:
        inline = getattr(p, "inline_data", None)
        data = getattr(inline, "data", None) if inline is not None else None
        if data:
            return data
    return None


def to_base64(data) -> str:
    if isinstance(data, str):
        return data
    return base64.b64encode(data).decode("ascii")
