# frontend/components/code_panel.py
import streamlit as st

from frontend.utils.api_client import APIClient
from frontend.utils.notices import apply_response


def render_code(api: APIClient, thread_id: str, state: dict):
    header, toggle = st.columns([4, 1])
    header.subheader("Python Editor")
    expanded = state.get("expanded_panel") == "code"
    if toggle.button("Collapse" if expanded else "Expand", key="expand_code"):
        apply_response(api.toggle_expand(thread_id, "code"))
        st.rerun()

    # Key on the exercise id so every newly loaded exercise reseeds the editor
    exercise = state.get("exercise") or {}
    code = st.text_area(
        "Code",
        value=state.get("code", ""),
        key=f"editor_{exercise.get('exercise_id')}",
        placeholder="Write your Python code here...",
        height=320 if expanded else 240,
        label_visibility="collapsed",
    )
    if code != state.get("code", ""):
        apply_response(api.edit_code(thread_id, code))

    loading = state.get("loading", {})
    busy = loading.get("improve") or loading.get("submit")
    col_run, col_improve, col_submit = st.columns(3)
    if col_run.button("Run", use_container_width=True):
        apply_response(api.run_code(thread_id, code))
        st.session_state.console = "Simulated run requested. Output is not executed in this environment."
        st.rerun()
    if col_improve.button("Get Suggestions", disabled=bool(busy), use_container_width=True):
        with st.spinner("Reviewing your code..."):
            apply_response(api.improve_code(thread_id, code))
        st.rerun()
    if col_submit.button("Submit", type="primary", disabled=bool(busy), use_container_width=True):
        with st.spinner("Checking your solution..."):
            apply_response(api.submit_code(thread_id, code))
        st.rerun()

    if st.session_state.get("console"):
        st.code(st.session_state.console, language="text")
