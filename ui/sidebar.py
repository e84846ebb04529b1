import streamlit as st

from core.env_loader import (
    clear_runtime_key, get_key_info, load_env, reset_caches_and_rerun,
    set_runtime_key, validate_key_format, write_dotenv_key,
)
from core.presets import VISUAL_STYLES, resolve_models
from core.project_io import export_zip, list_projects, load_project, save_project
from core.workflow import Completed


def _render_key_manager():
    with st.sidebar.expander("🔐 API Key (GEMINI_API_KEY)", expanded=False):
        current_key = load_env()
        st.caption(f"현재: {get_key_info(current_key)}")

        new_key = st.text_input(
            "새 키 입력 (아래 버튼을 눌러야 적용됩니다)",
            type="password",
            placeholder="GEMINI_API_KEY 붙여넣기…",
            key="api_key_entry_sidebar",
        )

        colK1, colK2 = st.columns(2)
        with colK1:
            if st.button("⚡ 이번 세션만 사용"):
                if not validate_key_format(new_key):
                    st.warning("키가 비어 있거나 형식이 올바르지 않습니다.")
                else:
                    set_runtime_key(new_key)
                    reset_caches_and_rerun()
        with colK2:
            if st.button("💾 .env에 저장"):
                if not validate_key_format(new_key):
                    st.warning("키가 비어 있거나 형식이 올바르지 않습니다.")
                elif write_dotenv_key(new_key):
                    reset_caches_and_rerun()
                else:
                    st.error(".env 파일을 쓸 수 없습니다. 쓰기 권한을 확인하세요.")

        colR1, colR2 = st.columns(2)
        with colR1:
            if st.button("🔄 .env 다시 읽기"):
                reset_caches_and_rerun()
        with colR2:
            if st.button("🧽 세션 키 제거"):
                clear_runtime_key()
                reset_caches_and_rerun()


def _render_project_box(workflow):
    st.sidebar.markdown("---")
    st.sidebar.subheader("📁 프로젝트")

    proj_files = list_projects()
    if proj_files:
        sel_file = st.sidebar.selectbox("프로젝트 열기", ["(선택)"] + [f.name for f in proj_files])
        if sel_file != "(선택)" and st.sidebar.button("📂 열기"):
            try:
                workflow.open_content(load_project(sel_file))
            except (OSError, ValueError) as e:
                st.sidebar.error(f"프로젝트를 열 수 없습니다: {e}")
            else:
                st.rerun()

    if not isinstance(workflow.state, Completed):
        st.sidebar.caption("미디어 생성이 끝나면 저장/내보내기를 할 수 있습니다.")
        return
    content = workflow.state.content

    name = st.sidebar.text_input("프로젝트 이름", value=st.session_state.get("topic", "shorts"))
    if st.sidebar.button("💾 프로젝트 저장", type="primary"):
        f = save_project(content, name)
        st.sidebar.success(f"저장됨: {f.name}")

    st.sidebar.download_button(
        "📦 ZIP 내보내기",
        data=export_zip(content),
        file_name="shorts_project.zip",
        mime="application/zip",
    )


def render_sidebar(workflow):
    st.sidebar.title("⚙️ 설정")
    _render_key_manager()

    models = resolve_models()
    st.sidebar.caption(
        f"script: `{models.script_model}` · image: `{models.image_model}` · "
        f"tts: `{models.tts_model}` ({models.tts_voice})"
    )
    with st.sidebar.expander("🎨 스타일 예시"):
        st.write("\n".join(f"- {s}" for s in VISUAL_STYLES))

    _render_project_box(workflow)

    api_key = load_env()
    if not api_key:
        st.sidebar.error(".env에서 GEMINI_API_KEY를 찾을 수 없습니다.")
    return api_key
