import logging

import streamlit as st

from core.data_models import SEGMENT_FIELDS
from core.generation import run_generate_assets
from core.workflow import Editing, GeneratingAssets

logger = logging.getLogger(__name__)


def _render_editor(workflow):
    script = workflow.state.script
    st.header("📝 대본 최종 수정")

    cols = st.columns(3)
    for col, field in zip(cols, SEGMENT_FIELDS):
        with col:
            setattr(script, field, st.text_area(field.upper(), value=getattr(script, field), height=160))

    script.bgm_prompt = st.text_input("BGM Mood / Prompt", value=script.bgm_prompt)

    with st.expander(f"🖼️ 이미지 프롬프트 ({len(script.image_prompts)})"):
        for i, prompt in enumerate(script.image_prompts):
            script.image_prompts[i] = st.text_input(f"장면 {i + 1}", value=prompt)

    colB1, colB2 = st.columns([1, 2])
    with colB1:
        if st.button("뒤로가기", use_container_width=True):
            workflow.back_to_idle()
            st.rerun()
    with colB2:
        if st.button("미디어 자산 일괄 생성하기", type="primary", use_container_width=True):
            workflow.begin_assets()
            st.rerun()


def _run_assets(workflow, client):
    script = workflow.state.script
    st.header("🎬 미디어 에셋 생성 중")
    with st.spinner(f"이미지 {len(script.image_prompts)}장을 고해상도로 렌더링하고 있습니다..."):
        try:
            content = run_generate_assets(
                client, script, st.session_state.aspect_ratio, st.session_state.visual_style,
            )
        except Exception:
            logger.exception("asset batch failed")
            workflow.assets_failed()
        else:
            workflow.assets_ready(content)
    st.rerun()


def render_section_2(workflow, client):
    if isinstance(workflow.state, Editing):
        _render_editor(workflow)
    elif isinstance(workflow.state, GeneratingAssets):
        _run_assets(workflow, client)
