import logging
import os

import streamlit as st
from dotenv import find_dotenv, load_dotenv, set_key

KEY_VARS = ("GEMINI_API_KEY", "GOOGLE_API_KEY")

# set by the "session only" button; wins over .env until cleared
_runtime_key = ""


def quiet_logs():
    os.environ.setdefault("GRPC_VERBOSITY", "ERROR")
    os.environ.setdefault("GRPC_CPP_ENABLE_STACKTRACE", "0")
    os.environ.setdefault("GRPC_ALTS_ENABLED", "0")
    for name in ("httpx", "httpcore", "google_genai.models", "absl"):
        logging.getLogger(name).setLevel(logging.WARNING)


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    quiet_logs()


def load_env() -> str:
    # always re-read .env so a key edited on disk is picked up on rerun
    load_dotenv(override=True)
    if _runtime_key:
        _apply_key(_runtime_key)
        return _runtime_key
    return os.getenv("GEMINI_API_KEY", "") or os.getenv("GOOGLE_API_KEY", "")


def get_key_info(key: str) -> str:
    if not key:
        return "키 없음"
    return f"key_len={len(key)} | key_hash={abs(hash(key)) % 100000}"


def validate_key_format(k: str) -> bool:
    return bool(k and k.strip() and " " not in k)


def _apply_key(key: str):
    for var in KEY_VARS:
        os.environ[var] = key


def set_runtime_key(new_key: str):
    """Override the key for this process only (.env untouched)."""
    global _runtime_key
    _runtime_key = new_key
    _apply_key(new_key)


def clear_runtime_key():
    global _runtime_key
    _runtime_key = ""
    for var in KEY_VARS:
        os.environ.pop(var, None)


def write_dotenv_key(new_key: str) -> bool:
    """
    Persist the key to .env (created in cwd if missing) and apply it at runtime.
    Returns True on success.
    """
    try:
        env_path = find_dotenv(usecwd=True)
        if not env_path:
            env_path = os.path.join(os.getcwd(), ".env")
            open(env_path, "a", encoding="utf-8").close()
        set_key(env_path, "GEMINI_API_KEY", new_key)
    except OSError:
        logging.getLogger(__name__).exception("could not write .env")
        return False
    clear_runtime_key()
    _apply_key(new_key)
    return True


def reset_caches_and_rerun():
    st.cache_resource.clear()
    st.cache_data.clear()
    st.rerun()


@st.cache_resource(show_spinner=False)
def init_client(api_key: str):
    if not api_key:
        return None
    from google import genai
    return genai.Client(api_key=api_key)
