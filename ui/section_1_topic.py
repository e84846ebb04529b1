import logging

import streamlit as st

from core.generation import generate_initial_script
from core.presets import ASPECT_RATIOS, MAX_IMAGE_COUNT, MIN_IMAGE_COUNT
from core.workflow import Idle, Scripting

logger = logging.getLogger(__name__)


def _render_topic_form(workflow, client):
    st.header("🎥 새로운 쇼츠 생성")
    ratios = list(ASPECT_RATIOS.keys())
    # plain session keys, not widget keys: widget state is dropped once the form is gone
    with st.form("topic_form"):
        topic = st.text_input("주제", value=st.session_state.topic,
                              placeholder="예: 서울에서 가장 맛있는 붕어빵 집")
        col1, col2 = st.columns(2)
        with col1:
            count = st.slider("장면(이미지) 개수", MIN_IMAGE_COUNT, MAX_IMAGE_COUNT,
                              value=int(st.session_state.image_count))
        with col2:
            ratio = st.selectbox(
                "화면 비율", ratios,
                index=ratios.index(st.session_state.aspect_ratio),
                format_func=lambda k: ASPECT_RATIOS[k],
            )
        style = st.text_input("비주얼 스타일", value=st.session_state.visual_style,
                              placeholder="예: Cinematic, 4K Photography, Cyberpunk...")
        submitted = st.form_submit_button(
            "쇼츠 대본 및 구성 생성하기", type="primary", use_container_width=True,
            disabled=client is None,
        )

    if client is None:
        st.info("사이드바에서 GEMINI_API_KEY를 설정하세요.")
    if submitted:
        st.session_state.update(topic=topic, image_count=count, aspect_ratio=ratio, visual_style=style)
        if topic.strip():
            workflow.begin_scripting(topic.strip())
            st.rerun()


def _run_scripting(workflow, client):
    with st.spinner("인공지능이 대본과 음악, 씬을 구성하고 있습니다..."):
        try:
            script = generate_initial_script(client, workflow.state.topic, int(st.session_state.image_count))
        except Exception:
            logger.exception("script generation failed")
            workflow.script_failed()
        else:
            workflow.script_ready(script)
    st.rerun()


def render_section_1(workflow, client):
    if isinstance(workflow.state, Idle):
        _render_topic_form(workflow, client)
    elif isinstance(workflow.state, Scripting):
        _run_scripting(workflow, client)
