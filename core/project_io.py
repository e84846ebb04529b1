# -*- coding: utf-8 -*-
import io
import json
import logging
import zipfile
from pathlib import Path
from typing import Optional

from core.data_models import GeneratedContent
from core.gemini_image import image_png_bytes
from core.pcm_audio import DecodeError, narration_wav_bytes
from core.text_utils import _safe_name

logger = logging.getLogger(__name__)

APP_DIR = Path(__file__).resolve().parents[1]
DATA_DIR = APP_DIR / "projects"


def _dump(content: GeneratedContent) -> str:
    return json.dumps(content.model_dump(by_alias=True), ensure_ascii=False, indent=2)


def save_project(content: GeneratedContent, name: str, data_dir: Optional[Path] = None) -> Path:
    d = Path(data_dir or DATA_DIR)
    d.mkdir(parents=True, exist_ok=True)
    f = d / f"{_safe_name(name) or 'shorts'}.json"
    f.write_text(_dump(content), encoding="utf-8")
    return f


def load_project(path: Path, data_dir: Optional[Path] = None) -> GeneratedContent:
    p = Path(path)
    if not p.is_absolute():
        p = Path(data_dir or DATA_DIR) / p
    with p.open("r", encoding="utf-8") as fp:
        raw = json.load(fp)
    return GeneratedContent.model_validate(raw)


def list_projects(data_dir: Optional[Path] = None) -> list:
    d = Path(data_dir or DATA_DIR)
    if not d.exists():
        return []
    return sorted(d.glob("*.json"))


def export_zip(content: GeneratedContent) -> bytes:
    """script.json + narration.wav + scene_XX.png (empty slots skipped)."""
    mem = io.BytesIO()
    with zipfile.ZipFile(mem, "w", zipfile.ZIP_DEFLATED) as z:
        z.writestr("script.json", json.dumps(
            content.script.model_dump(by_alias=True), ensure_ascii=False, indent=2,
        ))
        if content.audio:
            try:
                z.writestr("narration.wav", narration_wav_bytes(content.audio))
            except DecodeError:
                logger.warning("narration payload is not valid PCM; left out of the zip")
        for i, img in enumerate(content.images, 1):
            if not img:
                continue
            try:
                z.writestr(f"scene_{i:02d}.png", image_png_bytes(img))
            except ValueError:
                logger.warning("scene %d image is not decodable; left out of the zip", i)
    mem.seek(0)
    return mem.read()
