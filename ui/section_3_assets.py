# -*- coding: utf-8 -*-
import asyncio
import base64
import logging

import streamlit as st

from core.data_models import SEGMENT_FIELDS
from core.gemini_image import image_png_bytes, placeholder_image
from core.generation import regenerate_image_slot, regenerate_narration_slot
from core.pcm_audio import DecodeError, narration_wav_bytes
from core.presets import VIDEO_EXPORT_MESSAGE
from core.preview_sync import PreviewState, play_preview
from core.text_utils import scene_filename
from core.workflow import AUDIO_ERROR, Completed, image_error

logger = logging.getLogger(__name__)


# ===================== Helpers =====================

def _frames(content) -> list:
    """Displayable image per slot; empty/undecodable slots get a placeholder."""
    out = []
    for b64 in content.images:
        try:
            out.append(base64.b64decode(b64, validate=True) if b64 else placeholder_image(content.aspect_ratio))
        except ValueError:
            out.append(placeholder_image(content.aspect_ratio))
    return out


def _narration_wav(content):
    if not content.audio:
        return None
    try:
        return narration_wav_bytes(content.audio)
    except DecodeError:
        logger.warning("stored narration is not valid PCM")
        return None


def _show_frame(image_slot, subtitle_slot, frames, content, state: PreviewState):
    if frames:
        image_slot.image(frames[state.image_index], use_container_width=True)
    else:
        image_slot.image(placeholder_image(content.aspect_ratio), use_container_width=True)
    if state.subtitle:
        subtitle_slot.markdown(f"#### {state.subtitle}")
    else:
        subtitle_slot.empty()


# ===================== Preview =====================

def _render_preview(content):
    st.caption("VIDEO PREVIEW")
    frames = _frames(content)
    image_slot = st.empty()
    subtitle_slot = st.empty()
    control_slot = st.empty()
    progress_slot = st.empty()
    audio_slot = st.empty()
    _show_frame(image_slot, subtitle_slot, frames, content, PreviewState())

    wav = _narration_wav(content)
    if wav is None:
        control_slot.button("▶ 영상 미리보기 플레이", disabled=True, use_container_width=True)
        st.caption("나레이션이 없어 미리보기를 재생할 수 없습니다. 다시 녹음해 보세요.")
        return
    if not control_slot.button("▶ 영상 미리보기 플레이", key="play_preview", use_container_width=True):
        return

    # clicking stop requests a rerun; it lands at the next st call, so the
    # progress bar is redrawn on every loop iteration
    control_slot.button("■ 중지", key="stop_preview", type="primary", use_container_width=True)
    audio_slot.audio(wav, format="audio/wav", autoplay=True)

    last = {"state": None}

    def render(state: PreviewState):
        if state == last["state"]:
            return
        last["state"] = state
        _show_frame(image_slot, subtitle_slot, frames, content, state)

    def show_progress(fraction: float):
        progress_slot.progress(fraction)

    asyncio.run(play_preview(content, render=render, on_progress=show_progress))
    st.rerun()


# ===================== Asset editor =====================

def _render_script_editor(workflow, client, content):
    cols = st.columns(3)
    for col, field in zip(cols, SEGMENT_FIELDS):
        with col:
            setattr(content.script, field,
                    st.text_area(field, value=getattr(content.script, field), height=110))

    if st.button("🎙️ 수정한 대본으로 다시 녹음하기", use_container_width=True):
        with st.spinner("🔄 재녹음 중..."):
            try:
                workflow.update_content(regenerate_narration_slot(client, content))
            except Exception:
                logger.exception("narration regeneration failed")
                workflow.report_error(AUDIO_ERROR)
        st.rerun()

    wav = _narration_wav(content)
    if wav:
        st.audio(wav, format="audio/wav")


def _render_gallery(workflow, client, content):
    st.markdown("**장면별 이미지 갤러리**")
    frames = _frames(content)
    cols = st.columns(3)
    for idx, frame in enumerate(frames):
        with cols[idx % 3]:
            st.image(frame, use_container_width=True)
            content.script.image_prompts[idx] = st.text_input(
                f"프롬프트 {idx + 1}", value=content.script.image_prompts[idx],
            )
            colG1, colG2 = st.columns(2)
            with colG1:
                if st.button("🔄", key=f"regen_image_{idx}", help="이 장면만 다시 생성"):
                    with st.spinner(f"{idx + 1}번 이미지 생성 중..."):
                        try:
                            workflow.update_content(regenerate_image_slot(
                                client, content, idx, st.session_state.visual_style,
                            ))
                        except Exception:
                            logger.exception("image %d regeneration failed", idx)
                            workflow.report_error(image_error(idx))
                    st.rerun()
            with colG2:
                png = None
                if content.images[idx]:
                    try:
                        png = image_png_bytes(content.images[idx])
                    except ValueError:
                        png = None
                st.download_button(
                    "💾", data=png or b"", file_name=scene_filename(idx), mime="image/png",
                    key=f"dl_image_{idx}", disabled=png is None,
                )


def _render_exports(content):
    colX1, colX2 = st.columns(2)
    with colX1:
        wav = _narration_wav(content)
        st.download_button(
            "🎙️ 나레이션 파일 받기", data=wav or b"", file_name="narration.wav", mime="audio/wav",
            disabled=wav is None, use_container_width=True,
        )
    with colX2:
        if st.button("🎬 영상 제작 및 내보내기", use_container_width=True):
            st.info(VIDEO_EXPORT_MESSAGE)


def render_section_3(workflow, client):
    if not isinstance(workflow.state, Completed):
        return
    content = workflow.state.content

    left, right = st.columns([4, 8])
    # right side first: the preview loop blocks until playback ends
    with right:
        head1, head2 = st.columns([4, 1])
        with head1:
            st.subheader("🛠️ 미디어 에셋 편집")
        with head2:
            if st.button("새 프로젝트"):
                workflow.new_project()
                st.rerun()
        _render_script_editor(workflow, client, content)
        _render_gallery(workflow, client, content)
        _render_exports(content)
    with left:
        _render_preview(content)
