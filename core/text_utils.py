import re


def _safe_name(s: str) -> str:
    s = re.sub(r"[^\w\- ]+", "", s or "", flags=re.U)
    return s.strip().replace(" ", "_")[:60]


def scene_filename(index: int) -> str:
    """1-based file name used for PNG downloads."""
    return f"scene_{index + 1}.png"
