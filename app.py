import streamlit as st

from core.env_loader import init_client, setup_logging
from core.presets import DEFAULT_ASPECT_RATIO, DEFAULT_IMAGE_COUNT, DEFAULT_TOPIC, DEFAULT_VISUAL_STYLE
from core.workflow import Workflow

from ui.sidebar import render_sidebar
from ui.section_1_topic import render_section_1
from ui.section_2_script import render_section_2
from ui.section_3_assets import render_section_3

setup_logging()
st.set_page_config(page_title="Shorts Pro Studio", page_icon="🎥", layout="wide")

# Session init
if "workflow" not in st.session_state:
    st.session_state.workflow = Workflow()
for key, default in (
    ("topic", DEFAULT_TOPIC),
    ("image_count", DEFAULT_IMAGE_COUNT),
    ("aspect_ratio", DEFAULT_ASPECT_RATIO),
    ("visual_style", DEFAULT_VISUAL_STYLE),
):
    st.session_state.setdefault(key, default)

workflow: Workflow = st.session_state.workflow

api_key = render_sidebar(workflow)
client = init_client(api_key) if api_key else None

st.title("🎥 SHORTS PRO")
st.caption("대본부터 동기화된 영상까지 한 번에 완성")

if workflow.error:
    colE1, colE2 = st.columns([12, 1])
    with colE1:
        st.error(workflow.error)
    with colE2:
        if st.button("✕", key="dismiss_error"):
            workflow.dismiss_error()
            st.rerun()

# Sections (each renders only in its own workflow states)
render_section_1(workflow, client)
render_section_2(workflow, client)
render_section_3(workflow, client)
